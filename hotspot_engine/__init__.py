"""Wildlife hotspot aggregation service."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("hotspot-engine")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

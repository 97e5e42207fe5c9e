"""Tests for Alembic database migrations."""

from alembic.script import ScriptDirectory

from hotspot_engine.database import Base, alembic_config
from hotspot_engine import models  # noqa: F401


def _script_directory() -> ScriptDirectory:
    return ScriptDirectory.from_config(alembic_config())


def test_alembic_single_head():
    """Verify that the migration chain has no multiple heads."""
    heads = _script_directory().get_heads()
    assert len(heads) == 1, f"Expected 1 head, found {len(heads)}: {heads}"


def test_migration_chain_is_linear():
    """Verify the migration chain has proper linear dependencies."""
    revisions = list(_script_directory().walk_revisions())
    bases = [rev for rev in revisions if rev.down_revision is None]
    assert len(bases) == 1

    for rev in revisions:
        if rev.down_revision is not None:
            assert isinstance(rev.down_revision, str), (
                f"Revision {rev.revision} has multiple parents: {rev.down_revision}"
            )


def test_models_cover_migrated_tables():
    """Every ORM table is created by the migrations."""
    assert set(Base.metadata.tables) == {"wildlife_reports", "hotspots"}

"""Schemas for caller identity."""

from pydantic import BaseModel


class CallerIdentity(BaseModel):
    """An authenticated caller."""

    user_id: str

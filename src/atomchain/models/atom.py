# src/atomchain/models/atom.py
"""Atom data model."""

from typing import Any

from pydantic import BaseModel, Field


class Atom(BaseModel):
    """A single content item inside a band.

    Only ``id`` and ``type`` matter to the chain; ``payload`` belongs to
    whichever atoms manager built the atom.
    """

    id: str | None = None  # Assigned by the chains manager when the builder leaves it empty
    type: str
    payload: dict[str, Any] = Field(default_factory=dict)

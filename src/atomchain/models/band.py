# src/atomchain/models/band.py
"""Band data model."""

from pydantic import BaseModel, Field

from atomchain.models.atom import Atom


class Band(BaseModel):
    """A contiguous run of atoms sharing one type."""

    id: str
    type: str
    styles: dict[str, str] = Field(default_factory=dict)
    atoms: list[Atom] = Field(default_factory=list)

    def __str__(self) -> str:
        return f"Band:{self.id}"


def build_band(id: str, type: str, styles: dict[str, str] | None = None) -> Band:
    """Create an empty band. Default ``band_factory`` of the engine."""
    return Band(id=id, type=type, styles=dict(styles or {}))

# src/atomchain/models/chain.py
"""Chain data model."""

from pydantic import BaseModel, Field

from atomchain.models.atom import Atom
from atomchain.models.band import Band


class Chain(BaseModel):
    """An ordered document made of bands."""

    bands: list[Band] = Field(default_factory=list)

    def atoms(self) -> list[Atom]:
        """Flattened atom sequence, in band order."""
        return [atom for band in self.bands for atom in band.atoms]

    def atom_count(self) -> int:
        return sum(len(band.atoms) for band in self.bands)


def build_chain() -> Chain:
    """Create an empty chain. Default ``chain_factory`` of the chains manager."""
    return Chain()


def same_key(left: str | None, right: str | None) -> bool:
    """Compare two ids or type tags case-insensitively."""
    if left is None or right is None:
        return False
    return left.lower() == right.lower()

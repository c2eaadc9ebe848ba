# src/atomchain/ids.py
"""Random identifier allocation for atoms and bands."""

import random
from collections.abc import Callable, Iterable

from atomchain.exceptions import IdSpaceExhausted
from atomchain.models import Chain, same_key
from atomchain.settings import ChainSettings


class IdAllocator:
    """Generates short random ids that are unique within a chain.

    Atom ids are unique across every band of the chain; band ids are unique
    among the chain's bands. Both use the same length and alphabet taken
    from :class:`ChainSettings`.
    """

    def __init__(self, settings: ChainSettings | None = None, rng: random.Random | None = None) -> None:
        self.settings = settings or ChainSettings()
        self._rng = rng or random.SystemRandom()

    def random_id(self) -> str:
        alphabet = self.settings.id_alphabet
        return "".join(self._rng.choice(alphabet) for _ in range(self.settings.id_length))

    def new_atom_id(self, chain: Chain) -> str:
        return self._allocate("atom", lambda candidate: self.is_unique_atom_id(chain, candidate))

    def new_band_id(self, chain: Chain, taken: Iterable[str] = ()) -> str:
        """Allocate a band id.

        Args:
            chain: Chain whose bands the id must not collide with.
            taken: Extra ids to avoid, for bands built but not yet inserted.
        """
        reserved = {value.lower() for value in taken}
        return self._allocate(
            "band",
            lambda candidate: candidate.lower() not in reserved
            and self.is_unique_band_id(chain, candidate),
        )

    def is_unique_atom_id(self, chain: Chain, atom_id: str) -> bool:
        return not any(same_key(atom.id, atom_id) for band in chain.bands for atom in band.atoms)

    def is_unique_band_id(self, chain: Chain, band_id: str) -> bool:
        return not any(same_key(band.id, band_id) for band in chain.bands)

    def _allocate(self, scope: str, is_free: Callable[[str], bool]) -> str:
        for _ in range(self.settings.max_id_attempts):
            candidate = self.random_id()
            if is_free(candidate):
                return candidate
        raise IdSpaceExhausted(scope, self.settings.max_id_attempts)

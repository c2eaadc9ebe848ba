# src/atomchain/atoms/passthrough.py
"""In-memory atoms manager that keeps the pushed payload as content."""

from atomchain.atoms.base import AtomPush, AtomsManager
from atomchain.exceptions import ContentError
from atomchain.models import Atom


class PassthroughAtomsManager(AtomsManager):
    """Atoms manager with no storage behind it.

    Built atoms carry a copy of the push payload. Deletions and render
    preparations are recorded by atom id so callers can inspect them.
    """

    def __init__(self) -> None:
        self.deleted: set[str] = set()
        self.updated: list[str] = []
        self.rendered: list[str] = []

    def build(self, data: AtomPush) -> Atom:
        if not data.type.strip():
            raise ContentError("Atom type must not be empty")
        return Atom(id=data.id or None, type=data.type, payload=dict(data.payload))

    def delete(self, atom: Atom) -> None:
        key = self._key(atom)
        if key in self.deleted:
            raise ContentError(f"Content of atom '{atom.id}' was already deleted")
        self.deleted.add(key)

    def for_update(self, atom: Atom) -> None:
        self.updated.append(self._key(atom))

    def for_render(self, atom: Atom) -> None:
        self.rendered.append(self._key(atom))

    @staticmethod
    def _key(atom: Atom) -> str:
        if atom.id is None:
            raise ContentError("Atom has no id")
        return atom.id.lower()

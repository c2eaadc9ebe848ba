# src/atomchain/atoms/base.py
"""Contract between the chains manager and atom content."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from atomchain.models import Atom


class AtomPush(BaseModel):
    """Caller-supplied data for a new atom.

    ``id`` may be left empty; the chains manager then allocates one and
    writes it back here.
    """

    id: str | None = None
    type: str
    payload: dict[str, Any] = Field(default_factory=dict)


class AtomsManager(ABC):
    """Abstract base class for atom content lifecycle.

    Implementations own whatever lives behind an atom (files, records,
    rendered fragments) and raise :class:`atomchain.exceptions.ContentError`
    when that content cannot be handled.
    """

    @abstractmethod
    def build(self, data: AtomPush) -> Atom:
        """Materialize an atom from push data. May leave ``id`` unset."""
        ...

    @abstractmethod
    def delete(self, atom: Atom) -> None:
        """Destroy an atom's stored content."""
        ...

    @abstractmethod
    def for_update(self, atom: Atom) -> None:
        """Prepare an atom's content for an editing render."""
        ...

    @abstractmethod
    def for_render(self, atom: Atom) -> None:
        """Prepare an atom's content for a read-only render."""
        ...

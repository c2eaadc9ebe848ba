# src/atomchain/engine.py
"""Run-list engine: keeps the band/atom hierarchy of a chain consistent.

Every mutation decides whether an atom joins an existing band, gets a band of
its own, splits a band in two, or drags its whole band along. Bands that end
up empty are dropped by the same operation that emptied them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, MutableSequence
from contextlib import contextmanager
from typing import Protocol, TypeVar

from atomchain.display import format_chain
from atomchain.exceptions import NotFoundInChain
from atomchain.ids import IdAllocator
from atomchain.models import Atom, Band, Chain, build_band, same_key
from atomchain.settings import ChainSettings

logger = logging.getLogger(__name__)

BandFactory = Callable[..., Band]


class HasId(Protocol):
    id: str | None


T = TypeVar("T", bound=HasId)


def move_in_list(items: MutableSequence[T], item_id: str, position: int, kind: str = "item") -> bool:
    """Move the item carrying ``item_id`` to ``position``.

    The position is clamped into ``[0, len(items) - 1]``.

    Returns:
        True if the list changed, False if the item was already in place.

    Raises:
        NotFoundInChain: If no item carries ``item_id``.
    """
    index = next((i for i, item in enumerate(items) if same_key(item.id, item_id)), None)
    if index is None:
        raise NotFoundInChain(kind, item_id)
    position = max(0, min(position, len(items) - 1))
    if index == position:
        return False
    item = items.pop(index)
    items.insert(position, item)
    return True


class Edit:
    """Handle yielded by :meth:`RunListEngine.transaction`.

    Set ``changed`` to False when the edit turned out to be a no-op, so
    that bands are not merged behind the caller's back.
    """

    __slots__ = ("changed",)

    def __init__(self) -> None:
        self.changed = True


class RunListEngine:
    """Structural operations over a chain's bands and atoms.

    The engine holds no chain state of its own; every operation works on the
    chain passed in. Callers serialize concurrent edits of the same chain.

    Example:
        engine = RunListEngine()
        chain = Chain()
        engine.add_atom(chain, Atom(id="a1", type="text"))
        engine.add_atom(chain, Atom(id="i1", type="image"))
        engine.move_atom(chain, "i1", 0)
    """

    def __init__(
        self,
        settings: ChainSettings | None = None,
        *,
        ids: IdAllocator | None = None,
        band_factory: BandFactory = build_band,
    ) -> None:
        self.settings = settings or ChainSettings()
        self.ids = ids or IdAllocator(self.settings)
        self._band_factory = band_factory

    # -- lookups -----------------------------------------------------------

    def find_atom(self, chain: Chain, atom_id: str) -> Atom | None:
        """Return the atom with ``atom_id``, or None."""
        located = self._locate(chain, atom_id)
        if located is None:
            return None
        band, index = located
        return band.atoms[index]

    def find_band(self, chain: Chain, band_id: str) -> Band | None:
        """Return the band with ``band_id``, or None."""
        return next((band for band in chain.bands if same_key(band.id, band_id)), None)

    def find_atom_band(self, chain: Chain, atom_id: str) -> Band | None:
        """Return the band holding ``atom_id``, or None."""
        located = self._locate(chain, atom_id)
        return located[0] if located is not None else None

    def get_atom(self, chain: Chain, atom_id: str) -> Atom:
        atom = self.find_atom(chain, atom_id)
        if atom is None:
            raise NotFoundInChain("atom", atom_id)
        return atom

    def get_band(self, chain: Chain, band_id: str) -> Band:
        band = self.find_band(chain, band_id)
        if band is None:
            raise NotFoundInChain("band", band_id)
        return band

    def get_atom_band(self, chain: Chain, atom_id: str) -> Band:
        band = self.find_atom_band(chain, atom_id)
        if band is None:
            raise NotFoundInChain("atom", atom_id)
        return band

    # -- editing -----------------------------------------------------------

    @contextmanager
    def transaction(self, chain: Chain) -> Iterator[Edit]:
        """Wrap a structural edit of ``chain``.

        With ``atomic_moves`` the band list and every band's atom list are
        restored if the edit raises. With ``merge_adjacent_bands`` adjacent
        bands of equal type are merged once the edit succeeds, unless the
        edit marked itself unchanged.
        """
        snapshot = self._snapshot(chain) if self.settings.atomic_moves else None
        edit = Edit()
        try:
            yield edit
        except Exception:
            if snapshot is not None:
                self._restore(chain, snapshot)
                logger.debug("Rolled back failed edit: %s", format_chain(chain))
            raise
        if edit.changed and self.settings.merge_adjacent_bands:
            self.merge_adjacent_bands(chain)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Chain layout: %s", format_chain(chain))

    def add_atom(self, chain: Chain, atom: Atom) -> None:
        """Append ``atom`` to the last band, or to a new band if types differ."""
        band = chain.bands[-1] if chain.bands else None
        if band is None or not same_key(band.type, atom.type):
            band = self.create_band(chain, atom.type)
            chain.bands.append(band)
        band.atoms.append(atom)

    def remove_atom(self, chain: Chain, atom_id: str) -> Atom:
        """Unlink an atom from its band and return it.

        Raises:
            NotFoundInChain: If the atom is not in the chain.
        """
        with self.transaction(chain):
            band, index = self._require_atom(chain, atom_id)
            atom = band.atoms.pop(index)
            self._drop_if_empty(chain, band)
        return atom

    def move_in_band(self, chain: Chain, atom_id: str, position: int) -> None:
        """Move an atom to ``position`` inside its own band."""
        band = self.get_atom_band(chain, atom_id)
        move_in_list(band.atoms, atom_id, position, kind="atom")

    def move_band(self, chain: Chain, band_id: str, position: int) -> None:
        """Move a whole band to ``position`` in the chain's band list."""
        with self.transaction(chain) as edit:
            edit.changed = move_in_list(chain.bands, band_id, position, kind="band")

    def move_to_band(
        self, chain: Chain, atom_id: str, band_id: str, position: int | None = None
    ) -> None:
        """Move an atom into another band.

        Without ``position`` the atom goes to the end of the target band. With
        it, the atom is placed at that index, splitting the target band when
        the types differ.

        Raises:
            NotFoundInChain: If the atom or the target band is missing.
        """
        if position is None:
            self._move_to_end_of_band(chain, atom_id, band_id)
        else:
            self._move_into_band(chain, atom_id, band_id, max(position, 0))

    def move_atom(self, chain: Chain, atom_id: str, position: int) -> None:
        """Move an atom to ``position`` in the chain's flattened atom sequence.

        The position is counted with the atom already taken out, and clamped,
        so afterwards ``chain.atoms()[position]`` is the moved atom.
        """
        source, source_index = self._require_atom(chain, atom_id)
        offset = 0
        for band in chain.bands:
            if band is source:
                break
            offset += len(band.atoms)
        current = offset + source_index
        position = max(0, min(position, chain.atom_count() - 1))
        if position == current:
            return

        target: Band | None = None
        local = 0
        offset = 0
        for band in chain.bands:
            size = len(band.atoms) - (1 if band is source else 0)
            if position < offset + size:
                target, local = band, position - offset
                break
            offset += size

        with self.transaction(chain):
            if target is None:
                self._move_to_end_of_band(chain, atom_id, chain.bands[-1].id)
            elif target is source:
                move_in_list(source.atoms, atom_id, local, kind="atom")
            else:
                self._move_into_band(chain, atom_id, target.id, local)

    def set_band_style(self, chain: Chain, band_id: str, styles: dict[str, str]) -> None:
        """Replace a band's styles."""
        self.get_band(chain, band_id).styles = dict(styles)

    def create_band(
        self,
        chain: Chain,
        type: str,
        styles: dict[str, str] | None = None,
        taken: tuple[str, ...] = (),
    ) -> Band:
        """Build an empty band with a fresh id. The band is not inserted."""
        band = self._band_factory(id=self.ids.new_band_id(chain, taken), type=type, styles=styles)
        logger.debug("Created band %s of type %s", band.id, band.type)
        return band

    def copy_band(self, chain: Chain, source: Band, taken: tuple[str, ...] = ()) -> Band:
        """Build an empty band with the type and styles of ``source``."""
        return self.create_band(chain, source.type, source.styles, taken)

    def merge_adjacent_bands(self, chain: Chain) -> int:
        """Merge every run of neighbouring bands that share a type.

        The earlier band keeps its id and styles and takes over the atoms of
        the later one. Empty bands are dropped on the way.

        Returns:
            Number of bands removed.
        """
        removed = 0
        index = 0
        while index < len(chain.bands):
            band = chain.bands[index]
            if not band.atoms:
                del chain.bands[index]
                removed += 1
                continue
            previous = chain.bands[index - 1] if index > 0 else None
            if previous is not None and same_key(previous.type, band.type):
                previous.atoms.extend(band.atoms)
                del chain.bands[index]
                removed += 1
                logger.debug("Merged band %s into %s", band.id, previous.id)
                continue
            index += 1
        return removed

    # -- internals ---------------------------------------------------------

    def _move_to_end_of_band(self, chain: Chain, atom_id: str, band_id: str) -> None:
        with self.transaction(chain) as edit:
            source, index = self._require_atom(chain, atom_id)
            target = self.get_band(chain, band_id)
            if source is target:
                edit.changed = move_in_list(source.atoms, atom_id, len(source.atoms) - 1, kind="atom")
                return

            atom = source.atoms[index]
            if same_key(target.type, source.type):
                del source.atoms[index]
                target.atoms.append(atom)
                self._drop_if_empty(chain, source)
                return

            target_index = self._band_index(chain, target)
            following = chain.bands[target_index + 1] if target_index + 1 < len(chain.bands) else None
            if following is not None and same_key(following.type, source.type):
                # The next band already has the atom's type: join it at the front
                del source.atoms[index]
                following.atoms.insert(0, atom)
                self._drop_if_empty(chain, source)
                return

            band = self._detach(chain, source, index)
            chain.bands.insert(self._band_index(chain, target) + 1, band)

    def _move_into_band(self, chain: Chain, atom_id: str, band_id: str, position: int) -> None:
        source, index = self._require_atom(chain, atom_id)
        if same_key(source.id, band_id):
            self.move_in_band(chain, atom_id, position)
            return
        target = self.get_band(chain, band_id)
        if position >= len(target.atoms):
            self._move_to_end_of_band(chain, atom_id, band_id)
            return

        with self.transaction(chain):
            atom = source.atoms[index]
            if same_key(target.type, source.type):
                del source.atoms[index]
                self._drop_if_empty(chain, source)
                target.atoms.append(atom)
                move_in_list(target.atoms, atom_id, position, kind="atom")
                return

            target_index = self._band_index(chain, target)
            if position == 0:
                if target_index == 0:
                    chain.bands.insert(0, self._detach(chain, source, index))
                else:
                    self._move_to_end_of_band(chain, atom_id, chain.bands[target_index - 1].id)
                return

            # Interior of a band of another type: split it around the atom
            band = self._detach(chain, source, index)
            tail = self.copy_band(chain, target, taken=(band.id,))
            tail.atoms = target.atoms[position:]
            del target.atoms[position:]
            target_index = self._band_index(chain, target)
            chain.bands[target_index + 1:target_index + 1] = [band, tail]
            logger.debug("Split band %s at %d into %s", target.id, position, tail.id)

    def _detach(self, chain: Chain, source: Band, index: int) -> Band:
        """Take the atom at ``index`` out of ``source`` inside a band of its own.

        A single-atom source is removed from the chain and returned as is;
        otherwise the atom moves into a fresh copy of ``source``. The returned
        band is not in the chain.
        """
        if len(source.atoms) == 1:
            del chain.bands[self._band_index(chain, source)]
            return source
        band = self.copy_band(chain, source)
        band.atoms.append(source.atoms.pop(index))
        return band

    def _drop_if_empty(self, chain: Chain, band: Band) -> None:
        if not band.atoms:
            del chain.bands[self._band_index(chain, band)]
            logger.debug("Dropped empty band %s", band.id)

    def _locate(self, chain: Chain, atom_id: str) -> tuple[Band, int] | None:
        for band in chain.bands:
            for index, atom in enumerate(band.atoms):
                if same_key(atom.id, atom_id):
                    return band, index
        return None

    def _require_atom(self, chain: Chain, atom_id: str) -> tuple[Band, int]:
        located = self._locate(chain, atom_id)
        if located is None:
            raise NotFoundInChain("atom", atom_id)
        return located

    @staticmethod
    def _band_index(chain: Chain, band: Band) -> int:
        # Identity, not equality: pydantic compares models field by field
        return next(i for i, candidate in enumerate(chain.bands) if candidate is band)

    @staticmethod
    def _snapshot(chain: Chain) -> tuple[list[Band], list[tuple[Band, list[Atom]]]]:
        return list(chain.bands), [(band, list(band.atoms)) for band in chain.bands]

    @staticmethod
    def _restore(chain: Chain, snapshot: tuple[list[Band], list[tuple[Band, list[Atom]]]]) -> None:
        bands, contents = snapshot
        chain.bands = bands
        for band, atoms in contents:
            band.atoms = atoms

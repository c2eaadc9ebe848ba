# src/atomchain/manager.py
"""Chains manager: atom content lifecycle on top of the run-list engine."""

from __future__ import annotations

import logging
from collections.abc import Callable

from atomchain.atoms.base import AtomPush, AtomsManager
from atomchain.engine import BandFactory, RunListEngine
from atomchain.exceptions import NotUniqueId
from atomchain.ids import IdAllocator
from atomchain.models import Atom, Band, Chain, build_band, build_chain, same_key
from atomchain.settings import ChainSettings

logger = logging.getLogger(__name__)


class ChainsManager:
    """Public entry point for building and editing chains.

    Content work (building, deleting, preparing atoms for render) goes to the
    atoms manager; structural work goes to the run-list engine. Errors from
    either side reach the caller unchanged.

    Example:
        from atomchain import AtomPush, ChainsManager, PassthroughAtomsManager

        manager = ChainsManager(PassthroughAtomsManager())
        chain = manager.build_chain()
        heading = manager.push_atom(chain, AtomPush(type="text", payload={"body": "Hi"}))
        photo = manager.push_atom(chain, AtomPush(type="image"))
        manager.move_atom(chain, photo.id, 0)
    """

    def __init__(
        self,
        atoms_manager: AtomsManager,
        *,
        settings: ChainSettings | None = None,
        ids: IdAllocator | None = None,
        chain_factory: Callable[[], Chain] = build_chain,
        band_factory: BandFactory = build_band,
    ) -> None:
        self.atoms_manager = atoms_manager
        self.settings = settings or ChainSettings()
        self.ids = ids or IdAllocator(self.settings)
        self.engine = RunListEngine(self.settings, ids=self.ids, band_factory=band_factory)
        self._chain_factory = chain_factory

    def build_chain(self) -> Chain:
        return self._chain_factory()

    def push_atom(self, chain: Chain, data: AtomPush, band_id: str | None = None) -> Atom:
        """Build an atom from ``data`` and insert it into the chain.

        Without ``band_id`` the atom is appended to the end of the chain. With
        it, the atom goes to the end of that band, or right after it when the
        band holds another type.

        Returns:
            The built atom, already linked into the chain.

        Raises:
            NotFoundInChain: If ``band_id`` is given and does not exist. Checked
                before any content is built.
            NotUniqueId: If the atoms manager returned an id already in use.
            ContentError: If the atoms manager fails to build the atom.
        """
        band = self.engine.get_band(chain, band_id) if band_id is not None else None
        atom = self._build(chain, data)

        if band is None:
            self.engine.add_atom(chain, atom)
        elif same_key(band.type, atom.type):
            band.atoms.append(atom)
        else:
            with self.engine.transaction(chain):
                self.engine.add_atom(chain, atom)
                self.engine.move_to_band(chain, atom.id, band.id)
        logger.debug("Pushed %s atom %s", atom.type, atom.id)
        return atom

    def delete_atom(self, chain: Chain, atom_id: str) -> None:
        """Delete an atom's content, then unlink it from the chain."""
        atom = self.engine.get_atom(chain, atom_id)
        self.atoms_manager.delete(atom)
        self.engine.remove_atom(chain, atom_id)

    def for_update(self, chain: Chain) -> None:
        """Prepare every atom for an editing render."""
        atoms = chain.atoms()
        for atom in atoms:
            self.atoms_manager.for_update(atom)
        logger.debug("Prepared %d atoms for update", len(atoms))

    def for_render(self, chain: Chain) -> None:
        """Prepare every atom for a read-only render."""
        atoms = chain.atoms()
        for atom in atoms:
            self.atoms_manager.for_render(atom)
        logger.debug("Prepared %d atoms for render", len(atoms))

    def delete(self, chain: Chain) -> None:
        """Delete the content of every atom. The chain structure is left as is."""
        atoms = chain.atoms()
        for atom in atoms:
            self.atoms_manager.delete(atom)
        logger.info("Deleted content of %d atoms", len(atoms))

    # Structural operations, forwarded to the engine

    def get_atom(self, chain: Chain, atom_id: str) -> Atom:
        return self.engine.get_atom(chain, atom_id)

    def get_band(self, chain: Chain, band_id: str) -> Band:
        return self.engine.get_band(chain, band_id)

    def get_atom_band(self, chain: Chain, atom_id: str) -> Band:
        return self.engine.get_atom_band(chain, atom_id)

    def remove_atom(self, chain: Chain, atom_id: str) -> Atom:
        return self.engine.remove_atom(chain, atom_id)

    def move_in_band(self, chain: Chain, atom_id: str, position: int) -> None:
        self.engine.move_in_band(chain, atom_id, position)

    def move_band(self, chain: Chain, band_id: str, position: int) -> None:
        self.engine.move_band(chain, band_id, position)

    def move_to_band(
        self, chain: Chain, atom_id: str, band_id: str, position: int | None = None
    ) -> None:
        self.engine.move_to_band(chain, atom_id, band_id, position)

    def move_atom(self, chain: Chain, atom_id: str, position: int) -> None:
        self.engine.move_atom(chain, atom_id, position)

    def set_band_style(self, chain: Chain, band_id: str, styles: dict[str, str]) -> None:
        self.engine.set_band_style(chain, band_id, styles)

    def _build(self, chain: Chain, data: AtomPush) -> Atom:
        atom = self.atoms_manager.build(data)
        if not atom.id:
            atom.id = self.ids.new_atom_id(chain)
            data.id = atom.id
        elif not self.ids.is_unique_atom_id(chain, atom.id):
            raise NotUniqueId(atom.id)
        return atom

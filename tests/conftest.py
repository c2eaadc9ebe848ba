"""Shared pytest fixtures."""

import random

import pytest

from atomchain.atoms import PassthroughAtomsManager
from atomchain.engine import RunListEngine
from atomchain.ids import IdAllocator
from atomchain.manager import ChainsManager
from atomchain.models import Atom, Band, Chain
from atomchain.settings import ChainSettings


@pytest.fixture
def settings():
    """Default settings: adjacent bands merged, failed edits rolled back."""
    return ChainSettings()


@pytest.fixture
def ids(settings):
    """Id allocator with a seeded generator for reproducible ids."""
    return IdAllocator(settings, rng=random.Random(1234))


@pytest.fixture
def engine(settings, ids):
    return RunListEngine(settings, ids=ids)


@pytest.fixture
def raw_engine():
    """Engine that leaves split/merge results exactly as the moves produce them."""
    settings = ChainSettings(merge_adjacent_bands=False)
    return RunListEngine(settings, ids=IdAllocator(settings, rng=random.Random(99)))


@pytest.fixture
def atoms_manager():
    return PassthroughAtomsManager()


@pytest.fixture
def manager(atoms_manager, settings, ids):
    return ChainsManager(atoms_manager, settings=settings, ids=ids)


@pytest.fixture
def make_chain():
    """Build a chain from ``(band_id, type, [atom ids])`` tuples."""

    def _make(*bands: tuple[str, str, list[str]]) -> Chain:
        return Chain(
            bands=[
                Band(id=band_id, type=type_, atoms=[Atom(id=atom_id, type=type_) for atom_id in atom_ids])
                for band_id, type_, atom_ids in bands
            ]
        )

    return _make


@pytest.fixture
def layout():
    """Describe a chain as ``[(band_id, type, [atom ids]), ...]``."""

    def _layout(chain: Chain) -> list[tuple[str, str, list[str | None]]]:
        return [(band.id, band.type, [atom.id for atom in band.atoms]) for band in chain.bands]

    return _layout


@pytest.fixture
def shape():
    """Describe a chain as ``[(type, [atom ids]), ...]``, ignoring generated band ids."""

    def _shape(chain: Chain) -> list[tuple[str, list[str | None]]]:
        return [(band.type, [atom.id for atom in band.atoms]) for band in chain.bands]

    return _shape

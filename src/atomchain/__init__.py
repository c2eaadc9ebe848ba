"""atomchain - ordered content chains made of typed bands of atoms.

A chain is a document: an ordered list of bands, each band a run of atoms
sharing one type. The chains manager keeps that layout consistent while
atoms are pushed, deleted and moved around.

Quick Start:
    from atomchain import AtomPush, ChainsManager, PassthroughAtomsManager

    manager = ChainsManager(PassthroughAtomsManager())
    chain = manager.build_chain()

    intro = manager.push_atom(chain, AtomPush(type="text", payload={"body": "Intro"}))
    photo = manager.push_atom(chain, AtomPush(type="image", payload={"src": "a.png"}))

    # Put the photo first: the image band now precedes the text band
    manager.move_atom(chain, photo.id, 0)

Custom content:
    Subclass AtomsManager to store, delete and render atom content; the
    chains manager calls it for every content operation.
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("atomchain")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    try:
        import tomllib
        from pathlib import Path

        def _read_version_from_pyproject() -> str | None:
            for parent in Path(__file__).resolve().parents:
                pyproject = parent / "pyproject.toml"
                if pyproject.exists():
                    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                    version = data.get("project", {}).get("version")
                    return str(version) if version is not None else None
            return None

        __version__ = _read_version_from_pyproject() or "unknown"
    except Exception:
        __version__ = "unknown"

# Atom content contract
from atomchain.atoms import AtomPush, AtomsManager, PassthroughAtomsManager

# Debug views
from atomchain.display import chain_tree, format_chain

# Structural engine
from atomchain.engine import RunListEngine, move_in_list

# Errors
from atomchain.exceptions import (
    ChainError,
    ContentError,
    IdSpaceExhausted,
    NotFoundInChain,
    NotUniqueId,
)
from atomchain.ids import IdAllocator

# Public entry point
from atomchain.manager import ChainsManager

# Models
from atomchain.models import Atom, Band, Chain, build_band, build_chain

# Configuration
from atomchain.settings import ChainSettings

__all__ = [
    # Version
    "__version__",
    # Models
    "Atom",
    "Band",
    "Chain",
    "build_band",
    "build_chain",
    # Config
    "ChainSettings",
    # Errors
    "ChainError",
    "ContentError",
    "IdSpaceExhausted",
    "NotFoundInChain",
    "NotUniqueId",
    # Atom content
    "AtomPush",
    "AtomsManager",
    "PassthroughAtomsManager",
    # Structure
    "IdAllocator",
    "RunListEngine",
    "move_in_list",
    "ChainsManager",
    # Debug views
    "chain_tree",
    "format_chain",
]

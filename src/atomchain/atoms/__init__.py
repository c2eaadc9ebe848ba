# src/atomchain/atoms/__init__.py
"""Atom content managers."""

from atomchain.atoms.base import AtomPush, AtomsManager
from atomchain.atoms.passthrough import PassthroughAtomsManager

__all__ = ["AtomPush", "AtomsManager", "PassthroughAtomsManager"]

# src/atomchain/models/__init__.py
"""Data models for atomchain."""

from atomchain.models.atom import Atom
from atomchain.models.band import Band, build_band
from atomchain.models.chain import Chain, build_chain, same_key

__all__ = ["Atom", "Band", "Chain", "build_band", "build_chain", "same_key"]

# src/atomchain/settings.py
"""Configuration for chain editing.

Settings are passed programmatically to the id allocator, the run-list
engine and the chains manager. Nothing is read from the environment and
nothing is shared between instances.
"""

import string

from pydantic import BaseModel, field_validator

DEFAULT_ID_ALPHABET = string.ascii_lowercase + string.digits


class ChainSettings(BaseModel):
    """Behavioral settings for chain editing.

    Example:
        settings = ChainSettings(id_length=12)

        # Keep the raw split/merge results of every move
        settings = ChainSettings(merge_adjacent_bands=False)
    """

    # Identifier allocation
    id_length: int = 8
    id_alphabet: str = DEFAULT_ID_ALPHABET
    max_id_attempts: int = 1000

    # Merge neighbouring bands of equal type after every structural edit
    merge_adjacent_bands: bool = True

    # Restore the chain when a multi-step edit fails halfway
    atomic_moves: bool = True

    @field_validator("id_length", "max_id_attempts")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("id_alphabet")
    @classmethod
    def _lowercase_alphabet(cls, value: str) -> str:
        # Ids compare case-insensitively, so mixed-case alphabets would only add collisions
        alphabet = "".join(dict.fromkeys(value.lower()))
        if len(alphabet) < 2:
            raise ValueError("id_alphabet needs at least two distinct characters")
        return alphabet

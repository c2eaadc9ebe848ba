# src/atomchain/exceptions.py
"""Exceptions raised by atomchain."""


class ChainError(Exception):
    """Base class for all atomchain errors."""


class NotFoundInChain(ChainError, LookupError):
    """Raised when an atom or band id does not resolve inside a chain.

    Attributes:
        kind: What was looked up ("atom", "band", ...).
        item_id: The id that could not be found.
    """

    def __init__(self, kind: str, item_id: str | None) -> None:
        super().__init__(f"{kind.capitalize()} '{item_id}' not found in chain")
        self.kind = kind
        self.item_id = item_id


class NotUniqueId(ChainError, ValueError):
    """Raised when a built atom carries an id already used in the chain."""

    def __init__(self, atom_id: str) -> None:
        super().__init__(f"Atom id '{atom_id}' is already used in this chain")
        self.atom_id = atom_id


class ContentError(ChainError):
    """Raised by atoms managers when building, deleting or preparing content fails.

    The chains manager never catches it; it reaches the caller unchanged.
    """


class IdSpaceExhausted(ChainError):
    """Raised when the id allocator cannot find a free id."""

    def __init__(self, scope: str, attempts: int) -> None:
        super().__init__(f"No unique {scope} id found after {attempts} attempts")
        self.scope = scope
        self.attempts = attempts

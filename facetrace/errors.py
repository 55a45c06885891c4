"""
Exceptions raised by facetrace.

Geometric misses are never errors; they are reported as ``None``.
"""


class InvariantError(AssertionError):
    """A programming invariant was violated (e.g. a malformed scene).

    These indicate a bug in scene construction and are not meant to be
    recovered from.
    """
    pass


class UnknownSceneError(KeyError):
    """Requested scene generator does not exist."""

    def __init__(self, name: str, available: list[str]):
        super().__init__(name)
        self.name = name
        self.available = available

    def __str__(self) -> str:
        return f'unknown scene: "{self.name}"'

"""
player.py - Player identity for dropfour

Players are compared by identity: two players may share a name or a color
and still be different participants.
"""


class Player:
    """A participant in a game, identified by the object itself."""

    __slots__ = ("_name", "_color")

    def __init__(self, name: str, color: str):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_color", color)

    @property
    def name(self) -> str:
        return self._name

    @property
    def color(self) -> str:
        """Opaque color token, only meaningful to a presentation layer."""
        return self._color

    def __setattr__(self, key, value):
        raise AttributeError(f"Player is immutable; cannot set {key!r}")

    def __delattr__(self, key):
        raise AttributeError(f"Player is immutable; cannot delete {key!r}")

    def __repr__(self) -> str:
        return f"Player(name={self._name!r}, color={self._color!r})"

    def __str__(self) -> str:
        return self._name

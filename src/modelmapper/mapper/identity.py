"""
Identities are the keys of a registry: classes or opaque tokens, compared by reference.
"""
import inspect
from typing import Any


class Token:
    """
    An opaque, unique identity. Two tokens are never the same identity, even if they share a name.
    """
    __slots__ = [
        "name"
    ]

    # constructor

    def __init__(self, name: str = ""):
        self.name = name

    # override

    def __eq__(self, other):
        return self is other

    def __hash__(self):
        return id(self)

    def __str__(self):
        return f"Token({self.name})"

    def __repr__(self):
        return f"Token({self.name!r})"

def identity_name(identity: Any) -> str:
    """
    return a readable name for the given identity

    Args:
        identity: a class or token

    Returns:
        the qualified name for classes, `str()` for everything else
    """
    if inspect.isclass(identity):
        return identity.__qualname__

    return str(identity)

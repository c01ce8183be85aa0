from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from .identity import identity_name

S = TypeVar("S")
D = TypeVar("D")

class Transformation(Generic[S, D]):
    """
    A conversion function between a source and a destination identity.
    Instances are immutable.

    Example:
        ```python
        Transformation(Foo, Bar, lambda foo: Bar(title=foo.name))
        ```
    """
    __slots__ = [
        "source",
        "destination",
        "convert"
    ]

    # constructor

    def __init__(self, source: Any, destination: Any, convert: Callable[[S], D]):
        if not callable(convert):
            raise TypeError(f"convert must be callable, got {type(convert).__name__}")

        object.__setattr__(self, "source", source)
        object.__setattr__(self, "destination", destination)
        object.__setattr__(self, "convert", convert)

    # public

    def __call__(self, value: S) -> D:
        return self.convert(value)

    # override

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self):
        return f"Transformation({identity_name(self.source)} -> {identity_name(self.destination)})"

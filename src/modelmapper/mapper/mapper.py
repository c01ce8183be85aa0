from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, Optional, TypeVar

from modelmapper.configuration import ConfigurationManager, EnvConfigurationSource
from modelmapper.threading import ThreadLocalStack

from .registry import Registry
from .transformation import Transformation

S = TypeVar("S")
D = TypeVar("D")

class Mapper:
    """
    Static access to a shared registry, so that independent call sites can share mappings
    without passing a registry around.

    Calls are forwarded to the current registry: the innermost registry activated by `Mapper.use()`
    in the calling thread, or else the process wide default registry, which is created lazily.

    Example:
        ```python
        Mapper.register(Transformation(Foo, Bar, lambda foo: Bar(title=foo.name)))

        bar = Mapper.map(Foo, Bar, Foo(name="foo"))
        ```
    """
    # static data

    logger = logging.getLogger(__name__)

    _default: Optional[Registry] = None
    _lock = threading.Lock()
    _scopes: ThreadLocalStack[Registry] = ThreadLocalStack()

    # class methods

    @classmethod
    def default_registry(cls) -> Registry:
        """
        return the process wide default registry, creating it on first use from the environment configuration
        """
        registry = cls._default
        if registry is None:
            with cls._lock:
                if cls._default is None:
                    manager = ConfigurationManager()
                    EnvConfigurationSource(manager)

                    cls._default = Registry.from_configuration(manager.load())

                    cls.logger.debug("created default registry %r", cls._default)

                registry = cls._default

        return registry

    @classmethod
    def set_default_registry(cls, registry: Optional[Registry]) -> Optional[Registry]:
        """
        replace the default registry. Passing None resets it, the next call will create a fresh one.

        Returns:
            the previous default registry, or None
        """
        with cls._lock:
            previous = cls._default
            cls._default = registry

        cls.logger.debug("set default registry %r", registry)

        return previous

    @classmethod
    def current(cls) -> Registry:
        """
        return the registry calls are currently forwarded to
        """
        registry = cls._scopes.peek()
        if registry is None:
            registry = cls.default_registry()

        return registry

    @classmethod
    @contextmanager
    def use(cls, registry: Registry) -> Iterator[Registry]:
        """
        make the registry the current one for the calling thread within the `with` block

        Example:
            ```python
            with Mapper.use(Registry()) as registry:
                Mapper.register(...) # goes to `registry`
            ```
        """
        cls._scopes.push(registry)
        try:
            yield registry
        finally:
            cls._scopes.pop()

    # forwarding

    @classmethod
    def map(cls, source: Any, destination: Any, value: S) -> D:
        return cls.current().map(source, destination, value)

    @classmethod
    def map_all(cls, source: Any, destination: Any, values: Iterable[S]) -> list[D]:
        return cls.current().map_all(source, destination, values)

    @classmethod
    def register(cls, *transformations: Transformation) -> Registry:
        return cls.current().register_many(transformations)

    @classmethod
    def register_many(cls, transformations: Iterable[Transformation]) -> Registry:
        return cls.current().register_many(transformations)

    @classmethod
    def delete_mapping(cls, source: Any, destination: Any) -> None:
        cls.current().delete_mapping(source, destination)

    @classmethod
    def clear(cls) -> None:
        cls.current().clear()

    @classmethod
    def find_mapping(cls, source: Any, destination: Any) -> Optional[Transformation]:
        return cls.current().find_mapping(source, destination)

    @classmethod
    def has_mapping(cls, source: Any, destination: Any) -> bool:
        return cls.current().has_mapping(source, destination)

def map_function(source: Any, destination: Any, registry: Optional[Registry] = None):
    """
    Functions decorated with @map_function are registered as the transformation from `source` to `destination`.

    Args:
        source: the source identity
        destination: the destination identity
        registry: the target registry, defaults to the current registry of `Mapper`
    """
    def decorator(func: Callable[[S], D]) -> Callable[[S], D]:
        (registry if registry is not None else Mapper.current()).register(Transformation(source, destination, func))

        return func

    return decorator

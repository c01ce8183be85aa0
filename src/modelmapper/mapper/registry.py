from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, Iterator, Optional, TypeVar

from modelmapper.configuration import ConfigurationManager

from .errors import DuplicateMappingError, MappingNotFoundError
from .identity import identity_name
from .transformation import Transformation

S = TypeVar("S")
D = TypeVar("D")

class Registry:
    """
    A Registry stores transformations keyed by source identity and destination identity
    and executes them on request.

    Identities are compared by reference: the buckets are keyed by `id()` of the identity,
    the stored transformation keeps the identity itself alive.

    Example:
        ```python
        registry = Registry()
        registry.register(Transformation(Foo, Bar, lambda foo: {"title": foo["name"]}))

        bar = registry.map(Foo, Bar, {"name": "foo"})
        ```
    """
    # static data

    logger = logging.getLogger(__name__)

    __slots__ = [
        "atomic",
        "_mappings",
        "_lock"
    ]

    # class methods

    @classmethod
    def from_configuration(cls, manager: ConfigurationManager) -> Registry:
        """
        create a registry as described by the `mapper.*` configuration values

        Args:
            manager: the configuration manager

        Returns:
            the new registry
        """
        return cls(atomic=manager.get("mapper.atomic", bool, False))

    # constructor

    def __init__(self, atomic: bool = False):
        """
        Args:
            atomic: if True, batch registrations are all-or-nothing. Otherwise transformations are added one by one
                and the first duplicate aborts the batch, leaving the preceding ones registered.
        """
        self.atomic = atomic
        self._mappings : Dict[int, Dict[int, Transformation]] = {}
        self._lock = threading.RLock()

    # internal

    def _insert(self, transformation: Transformation):
        bucket = self._mappings.get(id(transformation.source))
        if bucket is None:
            bucket = self._mappings[id(transformation.source)] = {}

        bucket[id(transformation.destination)] = transformation

        self.logger.debug("registered %r", transformation)

    def _duplicate(self, transformation: Transformation) -> DuplicateMappingError:
        self.logger.debug("duplicate mapping %r", transformation)

        return DuplicateMappingError(transformation.source, transformation.destination)

    def _get_mapping(self, source: Any, destination: Any) -> Transformation:
        transformation = self.find_mapping(source, destination)
        if transformation is None:
            self.logger.debug("no mapping for %s -> %s", identity_name(source), identity_name(destination))

            raise MappingNotFoundError(source, destination)

        return transformation

    # public

    def register(self, *transformations: Transformation) -> Registry:
        """
        register the given transformations

        Raises:
            DuplicateMappingError: if a transformation for one of the pairs is already registered
        """
        return self.register_many(transformations)

    def register_many(self, transformations: Iterable[Transformation]) -> Registry:
        """
        register all transformations of the iterable, see `register`
        """
        transformations = list(transformations)

        with self._lock:
            if self.atomic:
                seen = set()
                for transformation in transformations:
                    key = (id(transformation.source), id(transformation.destination))
                    if key in seen or self.find_mapping(transformation.source, transformation.destination) is not None:
                        raise self._duplicate(transformation)

                    seen.add(key)

                for transformation in transformations:
                    self._insert(transformation)
            else:
                for transformation in transformations:
                    if self.find_mapping(transformation.source, transformation.destination) is not None:
                        raise self._duplicate(transformation)

                    self._insert(transformation)

        return self

    def find_mapping(self, source: Any, destination: Any) -> Optional[Transformation]:
        """
        return the transformation registered for the pair, or None
        """
        with self._lock:
            bucket = self._mappings.get(id(source))
            if bucket is None:
                return None

            return bucket.get(id(destination))

    def has_mapping(self, source: Any, destination: Any) -> bool:
        return self.find_mapping(source, destination) is not None

    def map(self, source: Any, destination: Any, value: S) -> D:
        """
        convert the value with the transformation registered for source and destination

        Args:
            source: the source identity
            destination: the destination identity
            value: the value to convert

        Returns:
            whatever the transformation returns

        Raises:
            MappingNotFoundError: if no transformation is registered for the pair
        """
        return self._get_mapping(source, destination)(value)

    def map_all(self, source: Any, destination: Any, values: Iterable[S]) -> list[D]:
        """
        convert every value of the iterable with the transformation registered for source and destination

        Raises:
            MappingNotFoundError: if no transformation is registered for the pair, even if `values` is empty
        """
        transformation = self._get_mapping(source, destination)

        return [transformation(value) for value in values]

    def delete_mapping(self, source: Any, destination: Any) -> None:
        """
        delete the transformation for the pair, if any
        """
        with self._lock:
            bucket = self._mappings.get(id(source))
            if bucket is None:
                return

            transformation = bucket.pop(id(destination), None)
            if not bucket:
                del self._mappings[id(source)]

        if transformation is not None:
            self.logger.debug("deleted %r", transformation)

    def clear(self) -> None:
        """
        delete all transformations
        """
        with self._lock:
            self._mappings.clear()

        self.logger.debug("cleared %s", self)

    # override

    def __len__(self):
        with self._lock:
            return sum(len(bucket) for bucket in self._mappings.values())

    def __iter__(self) -> Iterator[Transformation]:
        with self._lock:
            transformations = [transformation for bucket in self._mappings.values() for transformation in bucket.values()]

        return iter(transformations)

    def __repr__(self):
        return f"Registry(atomic={self.atomic}, mappings={len(self)})"

from typing import Any

from .identity import identity_name


class MapperError(Exception):
    """
    Base class for all errors raised by a registry.
    """
    pass

class DuplicateMappingError(MapperError):
    """
    Raised when registering a transformation for a pair that already has one.
    """
    def __init__(self, source: Any, destination: Any):
        super().__init__(f"adding mapping failed: the mapping key already added (source: {identity_name(source)}, destination: {identity_name(destination)})")

        self.source = source
        self.destination = destination

class MappingNotFoundError(MapperError, LookupError):
    """
    Raised when no transformation is registered for the requested pair.
    """
    def __init__(self, source: Any, destination: Any):
        super().__init__(f"mapping not registered (source: {identity_name(source)}, destination: {identity_name(destination)})")

        self.source = source
        self.destination = destination

"""
This module provides the registry of transformations between models
"""
from .identity import Token, identity_name
from .transformation import Transformation
from .errors import MapperError, DuplicateMappingError, MappingNotFoundError
from .registry import Registry
from .mapper import Mapper, map_function

__all__ = [
    # identity

    "Token",
    "identity_name",

    # transformation

    "Transformation",

    # errors

    "MapperError",
    "DuplicateMappingError",
    "MappingNotFoundError",

    # registry

    "Registry",
    "Mapper",
    "map_function"
]

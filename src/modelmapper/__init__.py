"""
modelmapper - a registry of conversion functions between model types.
"""
from .mapper import Mapper, Registry, Transformation, Token, map_function, MapperError, DuplicateMappingError, MappingNotFoundError

__all__ = [
    "Mapper",
    "Registry",
    "Transformation",
    "Token",
    "map_function",

    "MapperError",
    "DuplicateMappingError",
    "MappingNotFoundError"
]

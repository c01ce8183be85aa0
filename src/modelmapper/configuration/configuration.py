from __future__ import annotations

import logging
import os
from typing import Any, Optional, Type, TypeVar

from dotenv import load_dotenv

T = TypeVar("T")

class ConfigurationException(Exception):
    """
    Exception raised for values that can't be coerced to the requested type.
    """
    pass

def merge_dicts(a: dict, b: dict) -> dict:
    """
    return a copy of `a` with `b` merged into it, nested dicts are merged recursively
    """
    result = a.copy()
    for key, b_val in b.items():
        a_val = result.get(key)
        if isinstance(a_val, dict) and isinstance(b_val, dict):
            result[key] = merge_dicts(a_val, b_val)
        else:
            result[key] = b_val

    return result

class ConfigurationManager:
    """
    The ConfigurationManager merges the values of all registered sources and answers
    lookups by dotted paths.
    """
    # static data

    logger = logging.getLogger(__name__)

    # constructor

    def __init__(self):
        self.sources : list[ConfigurationSource] = []
        self._data = dict()
        self.coercions = {
            int: int,
            float: float,
            bool: lambda v: str(v).lower() in ("1", "true", "yes", "on"),
            str: str,
        }

    # internal

    def _register(self, source: ConfigurationSource):
        self.sources.append(source)

    # public

    def load(self) -> ConfigurationManager:
        """
        (re)load all sources, later sources override earlier ones
        """
        data = {}
        for source in self.sources:
            data = merge_dicts(data, source.load())

        self._data = data

        self.logger.debug("loaded configuration from %d source(s)", len(self.sources))

        return self

    def value(self, path: str, default=None) -> Any:
        current = self._data
        for key in path.split("."):
            if not isinstance(current, dict) or key not in current:
                return default

            current = current[key]

        return current

    def get(self, path: str, type: Type[T], default: Optional[T] = None) -> Optional[T]:
        """
        return the value for a dotted path coerced to the given type

        Args:
            path: the path, e.g. "mapper.atomic"
            type: the expected type
            default: returned if the path is missing

        Returns:
            the coerced value or the default
        """
        v = self.value(path, default)

        if v is None or isinstance(v, type):
            return v

        coercion = self.coercions.get(type)
        if coercion is None:
            raise ConfigurationException(f"unknown coercion to {type}")

        try:
            return coercion(v)
        except (TypeError, ValueError) as e:
            raise ConfigurationException(f"cannot coerce {path}={v!r} to {type.__name__}") from e

class ConfigurationSource:
    """
    Base class for configuration sources. A source registers itself with the manager on creation.
    """
    def __init__(self, manager: ConfigurationManager):
        manager._register(self)

    def load(self) -> dict:
        return {}

class DictConfigurationSource(ConfigurationSource):
    """
    A source returning a fixed dictionary.
    """
    # constructor

    def __init__(self, manager: ConfigurationManager, data: dict):
        super().__init__(manager)

        self.data = data

    # implement

    def load(self) -> dict:
        return self.data

class EnvConfigurationSource(ConfigurationSource):
    """
    A source reading the process environment, including the values of a `.env` file.
    Keys containing '.' or '/' are exploded into nested dictionaries.
    """
    # constructor

    def __init__(self, manager: ConfigurationManager):
        super().__init__(manager)

        load_dotenv()

    # implement

    def load(self) -> dict:
        def explode_key(key, value):
            parts = key.replace('/', '.').split('.')
            d = current = {}
            for part in parts[:-1]:
                current[part] = {}
                current = current[part]
            current[parts[-1]] = value
            return d

        exploded = {}

        for key, value in os.environ.items():
            if '.' in key or '/' in key:
                exploded = merge_dicts(exploded, explode_key(key, value))
            else:
                exploded[key] = value

        return exploded

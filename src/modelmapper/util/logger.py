from __future__ import annotations

import logging
from typing import Dict, Optional, Union

from modelmapper.configuration import ConfigurationManager

DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s in %(filename)s:%(lineno)d - %(message)s"

def _level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level

    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level {level}")

    return resolved

class ConfigureLogger:
    """just syntactic sugar"""
    # class methods

    @classmethod
    def from_configuration(cls, manager: ConfigurationManager, format: str = DEFAULT_FORMAT) -> ConfigureLogger:
        """
        configure logging from `logging.level` and `logging.levels.<logger>`
        """
        levels = manager.value("logging.levels", {}) or {}

        def flatten(prefix: str, value) -> Dict[str, str]:
            if not isinstance(value, dict):
                return {prefix: value}

            result = {}
            for key, child in value.items():
                result.update(flatten(f"{prefix}.{key}" if prefix else key, child))

            return result

        return cls(
            default_level=manager.get("logging.level", str, "INFO"),
            format=format,
            levels=flatten("", levels)
        )

    # constructor

    def __init__(self,
                 default_level: Union[int, str] = logging.INFO,
                 format: str = DEFAULT_FORMAT,
                 levels: Optional[Dict[str, Union[int, str]]] = None):
        logging.basicConfig(level=_level(default_level), format=format)

        self.levels = {}
        if levels is not None:
            for name, level in levels.items():
                self.levels[name] = _level(level)
                logging.getLogger(name).setLevel(self.levels[name])

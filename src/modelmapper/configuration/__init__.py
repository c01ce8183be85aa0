"""
Configuration values read from dictionaries and the environment.
"""
from .configuration import ConfigurationManager, ConfigurationSource, DictConfigurationSource, EnvConfigurationSource, ConfigurationException

__all__ = [
    "ConfigurationManager",
    "ConfigurationSource",
    "DictConfigurationSource",
    "EnvConfigurationSource",
    "ConfigurationException"
]

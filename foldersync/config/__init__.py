"""
foldersync Configuration Module

Handles configuration loading and validation. Settings come from an
optional YAML file, environment variables and the command line.

Author: foldersync Project
License: MIT
"""

from .config_loader import ConfigLoader, load_config
from .schema import Config, HashAlgorithm, LogLevel

__all__ = ['ConfigLoader', 'load_config', 'Config', 'HashAlgorithm', 'LogLevel']

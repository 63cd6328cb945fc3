"""Exception hierarchy shared across moddoc components."""

from __future__ import annotations


class ModDocError(RuntimeError):
    """Base class for fatal moddoc failures."""


class ConfigError(ModDocError):
    """Raised when the configuration file cannot be parsed."""


class ModuleResolutionError(ModDocError):
    """Raised when the module root or its go.mod descriptor is unusable."""


class IndexerError(ModDocError):
    """Raised when the source corpus cannot be indexed."""


class OutputDirectoryError(ModDocError):
    """Raised when the output directory is unusable or holds foreign files."""


__all__ = [
    "ConfigError",
    "IndexerError",
    "ModDocError",
    "ModuleResolutionError",
    "OutputDirectoryError",
]

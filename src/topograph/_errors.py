"""Exceptions raised outside the core sort."""


class TopographError(Exception):
    """Base class for topograph errors."""


class GraphFileError(TopographError):
    """A graph definition file is malformed or references unknown nodes."""


class ConfigError(TopographError):
    """Error in topograph configuration."""

"""Host-facing services: configuration and option resolution."""

from .settings import (
    ConfigurationProvider,
    EnvironmentConfiguration,
    MappingConfiguration,
    WrappingOptions,
    resolve_wrapping_options,
)

__all__ = [
    "ConfigurationProvider",
    "EnvironmentConfiguration",
    "MappingConfiguration",
    "WrappingOptions",
    "resolve_wrapping_options",
]

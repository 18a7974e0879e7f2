"""Exception types raised by plugin-use itself.

Exceptions raised inside a plugin body are never wrapped in any of these;
they reach the caller of ``use`` or ``run`` unchanged.
"""
from __future__ import annotations


class PluginUseError(Exception):
    """Base class for errors detected by the library."""


class NotPluggableError(PluginUseError, TypeError):
    """Raised when a value cannot carry ``use``/``run`` capability.

    Attributes
    ----------
    value_type:
        Name of the offending value's type.
    """

    def __init__(self, value: object, reason: str = "") -> None:
        self.value_type = type(value).__name__
        message = f"Object of type {self.value_type!r} cannot be made pluggable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PluginResolutionError(PluginUseError, ImportError):
    """Raised when a dotted plugin reference cannot be resolved.

    Attributes
    ----------
    reference:
        The reference string as given, e.g. ``"my_pkg.plugins:setup"``.
    """

    def __init__(self, reference: str, reason: str) -> None:
        self.reference = reference
        super().__init__(f"Cannot resolve plugin {reference!r}: {reason}")

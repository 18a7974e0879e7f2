"""Plugin registry mixin.

Gives any object-like host two chainable operations:

- ``host.use(plugin)`` calls ``plugin(host)`` immediately.  When the plugin
  returns another callable, that callable is appended to ``host.deferred``.
- ``host.run(target)`` replays every callable in ``host.deferred`` onto
  ``target`` through ``target.use``, decorating ``target`` first when it is
  not pluggable yet.

Example
-------
::

    from plugin_use import attach

    class App:
        pass

    def logger_plugin(app):
        app.log = []
        return lambda other: setattr(other, "log", [])

    app = App()
    attach(app)
    app.use(logger_plugin)

    config = App()
    app.run(config)          # returns app, not config
    assert config.log == []

Plugin exceptions are never caught.  ``run`` stops at the first failing
plugin and leaves the effects of the earlier ones in place.
"""
from __future__ import annotations

import logging
from types import MethodType
from typing import Any, Callable, Optional

from plugin_use.errors import NotPluggableError

logger = logging.getLogger(__name__)

Plugin = Callable[[Any], Any]
"""A callable taking the host; may return a deferred plugin."""

_PRIMITIVE_TYPES: tuple[type, ...] = (bool, int, float, complex, str, bytes, bytearray)


# ---------------------------------------------------------------------------
# Capability check
# ---------------------------------------------------------------------------


def is_object_like(value: object) -> bool:
    """Return True when *value* can have attributes attached to it.

    Primitives and ``None`` are never object-like.  Anything else qualifies
    when it carries an instance ``__dict__`` (plain objects, functions,
    classes, modules).
    """
    if value is None or isinstance(value, _PRIMITIVE_TYPES):
        return False
    return hasattr(value, "__dict__")


def _describe(value: object) -> str:
    return getattr(value, "__qualname__", None) or type(value).__name__


def _bound_to(host: object, name: str) -> bool:
    """True when *host*.<name> is a method bound to *host* itself.

    A method bound to a class that was attached does not count for its
    instances.
    """
    method = getattr(host, name, None)
    return callable(method) and getattr(method, "__self__", None) is host


def _own_deferred(host: object) -> Optional[list[Plugin]]:
    return vars(host).get("deferred")


def _set_attribute(host: object, name: str, value: object) -> None:
    try:
        setattr(host, name, value)
    except (AttributeError, ValueError) as exc:
        raise NotPluggableError(host, f"attribute {name!r} is not writable") from exc


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def use(host: Any, plugin: Plugin) -> Any:
    """Call *plugin* with *host* and queue its deferred form, if any.

    Parameters
    ----------
    host:
        An attached host (it must carry a ``deferred`` list).
    plugin:
        Callable invoked as ``plugin(host)``.

    Returns
    -------
    Any
        *host*, for chaining.
    """
    result = plugin(host)
    if callable(result):
        host.deferred.append(result)
        logger.debug(
            "Plugin %s deferred %s on %s",
            _describe(plugin),
            _describe(result),
            type(host).__name__,
        )
    return host


def run(host: Any, target: Any) -> Any:
    """Replay all of *host*'s deferred plugins onto *target*.

    *target* is made pluggable first when it is object-like and has no
    ``use`` method.  The deferred list is snapshotted before iteration, so
    plugins deferred while replaying only affect later ``run`` calls.

    Returns
    -------
    Any
        *host*, not *target*.

    Raises
    ------
    NotPluggableError
        If there is something to replay and *target* cannot accept it.
    """
    if is_object_like(target) and not _bound_to(target, "use"):
        _decorate(target)

    fns = tuple(host.deferred)
    if fns and not _bound_to(target, "use"):
        raise NotPluggableError(target, "it has no use() method")

    logger.debug(
        "Replaying %d deferred plugin(s) from %s onto %s",
        len(fns),
        type(host).__name__,
        type(target).__name__,
    )
    for fn in fns:
        target.use(fn)
    return host


def attach(host: Any, *, reset: bool = False) -> None:
    """Attach ``deferred``, ``use`` and ``run`` to *host*.

    Attaching is idempotent: an existing ``deferred`` list is kept as the
    same instance, and ``use``/``run`` are only bound when missing.  Pass
    ``reset=True`` to start over with an empty list and fresh bindings.

    Raises
    ------
    NotPluggableError
        If *host* is not object-like or rejects new attributes.
    """
    if not is_object_like(host):
        raise NotPluggableError(host)

    if reset or _own_deferred(host) is None:
        _set_attribute(host, "deferred", [])
    if reset or not _bound_to(host, "use"):
        _set_attribute(host, "use", MethodType(use, host))
    if reset or not _bound_to(host, "run"):
        _set_attribute(host, "run", MethodType(run, host))
    logger.debug("Attached plugin registry to %s", type(host).__name__)


def base() -> Plugin:
    """Return a plugin that attaches the registry to whatever host uses it.

    The returned plugin yields ``None`` so it is never deferred itself.
    """

    def attach_plugin(host: Any) -> None:
        attach(host)

    return attach_plugin


def _decorate(target: Any) -> None:
    existing = _own_deferred(target)
    _set_attribute(target, "deferred", existing if existing is not None else [])
    _set_attribute(target, "use", MethodType(use, target))
    target.use(base())


# ---------------------------------------------------------------------------
# Composition alternative
# ---------------------------------------------------------------------------


class Pluggable:
    """Base class carrying the registry as ordinary methods.

    Subclasses that define ``__init__`` must call ``super().__init__()``.

    Example
    -------
    ::

        class Server(Pluggable):
            pass

        server = Server().use(auth_plugin).use(routes_plugin)
        server.run(Server())
    """

    def __init__(self) -> None:
        self.deferred: list[Plugin] = []

    def use(self, plugin: Plugin) -> Any:
        """Call *plugin* with this instance; see :func:`plugin_use.mixin.use`."""
        return use(self, plugin)

    def run(self, target: Any) -> Any:
        """Replay deferred plugins onto *target*; see :func:`plugin_use.mixin.run`."""
        return run(self, target)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(deferred={len(self.deferred)})"

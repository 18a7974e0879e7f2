"""Locate plugins by dotted reference or through package entry-points.

Third-party packages expose plugins under the ``plugin_use.plugins``
entry-point group.

Example
-------
Declare a plugin in pyproject.toml:

.. code-block:: toml

    [project.entry-points."plugin_use.plugins"]
    audit = "my_package.plugins:audit_plugin"
"""
from __future__ import annotations

import importlib
import importlib.metadata
import logging
from typing import Any, Iterator

from plugin_use.errors import PluginResolutionError
from plugin_use.mixin import Plugin, attach

logger = logging.getLogger(__name__)

DEFAULT_ENTRYPOINT_GROUP: str = "plugin_use.plugins"


def resolve_plugin(reference: str) -> Plugin:
    """Import and return the callable named by *reference*.

    Accepts ``"package.module:attr"`` and ``"package.module.attr"``.  The
    attribute part may itself be dotted (``"pkg.mod:Class.factory"``).

    Raises
    ------
    PluginResolutionError
        If the module cannot be imported, the attribute is missing, or the
        target is not callable.
    """
    reference = reference.strip()
    if ":" in reference:
        module_name, _, attr_path = reference.partition(":")
    else:
        module_name, _, attr_path = reference.rpartition(".")
    if not module_name or not attr_path:
        raise PluginResolutionError(reference, "expected 'module:attribute'")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise PluginResolutionError(reference, str(exc)) from exc

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise PluginResolutionError(
                reference, f"{module_name!r} has no attribute {attr_path!r}"
            ) from exc

    if not callable(target):
        raise PluginResolutionError(reference, "target is not callable")
    return target


def iter_entrypoint_plugins(
    group: str = DEFAULT_ENTRYPOINT_GROUP,
) -> Iterator[tuple[str, Plugin]]:
    """Yield ``(name, plugin)`` for every loadable entry-point in *group*.

    Entry points that raise while loading, or that load to something not
    callable, are logged and skipped.
    """
    for entry_point in importlib.metadata.entry_points(group=group):
        try:
            plugin = entry_point.load()
        except Exception:
            logger.warning(
                "Failed to load plugin entry-point %r from group %r",
                entry_point.name,
                group,
                exc_info=True,
            )
            continue
        if not callable(plugin):
            logger.warning(
                "Entry-point %r in group %r is not callable; skipping",
                entry_point.name,
                group,
            )
            continue
        yield entry_point.name, plugin


def use_entrypoints(host: Any, group: str = DEFAULT_ENTRYPOINT_GROUP) -> Any:
    """``use`` every entry-point plugin of *group* on *host*, in order.

    *host* is attached first if needed.  Exceptions raised by the plugins
    themselves propagate.

    Returns
    -------
    Any
        *host*, for chaining.
    """
    attach(host)
    for name, plugin in iter_entrypoint_plugins(group):
        logger.debug("Using entry-point plugin %r from group %r", name, group)
        host.use(plugin)
    return host

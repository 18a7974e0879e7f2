"""plugin-use — attach ``use``/``run`` plugin capability to any object.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import plugin_use
>>> plugin_use.__version__
'0.1.0'

Mixin
-----
>>> from plugin_use import attach
>>> class App:
...     pass
>>> app = App()
>>> attach(app)
>>> app.use(lambda host: lambda other: setattr(other, "ready", True)) is app
True
>>> target = App()
>>> app.run(target) is app
True
>>> target.ready
True

Composition
-----------
>>> from plugin_use import Pluggable
>>> len(Pluggable().use(lambda host: None).deferred)
0

Manifest
--------
>>> from plugin_use import PluginManifest, apply_manifest
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Mixin
# ---------------------------------------------------------------------------
from plugin_use.mixin import Plugin, Pluggable, attach, base, is_object_like, run, use

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
from plugin_use.errors import NotPluggableError, PluginResolutionError, PluginUseError

# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------
from plugin_use.discovery import (
    DEFAULT_ENTRYPOINT_GROUP,
    iter_entrypoint_plugins,
    resolve_plugin,
    use_entrypoints,
)

# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------
from plugin_use.manifest import PluginManifest, PluginSpec, apply_manifest

__all__ = [
    # Version
    "__version__",
    # Mixin
    "Plugin",
    "Pluggable",
    "attach",
    "base",
    "is_object_like",
    "run",
    "use",
    # Errors
    "NotPluggableError",
    "PluginResolutionError",
    "PluginUseError",
    # Discovery
    "DEFAULT_ENTRYPOINT_GROUP",
    "iter_entrypoint_plugins",
    "resolve_plugin",
    "use_entrypoints",
    # Manifest
    "PluginManifest",
    "PluginSpec",
    "apply_manifest",
]

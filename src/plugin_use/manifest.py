"""Declarative plugin manifest.

A manifest lists plugin references to ``use`` on a host, in order, plus
any entry-point groups to pull in afterwards:

.. code-block:: yaml

    plugins:
      - ref: my_package.plugins:setup_logging
      - ref: my_package.plugins:routes
        enabled: false
        description: Disabled until the router lands.
    entrypoint_groups:
      - plugin_use.plugins

Classes
-------
- PluginSpec      One manifest entry (pydantic v2 model).
- PluginManifest  The full document, loadable from YAML.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from plugin_use.discovery import resolve_plugin, use_entrypoints
from plugin_use.mixin import attach

logger = logging.getLogger(__name__)


class PluginSpec(BaseModel):
    """A single plugin reference in a manifest."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    ref: str = Field(description="Dotted reference, e.g. 'pkg.plugins:setup'.")
    enabled: bool = True
    description: str = ""

    @field_validator("ref")
    @classmethod
    def _ref_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("ref must not be empty")
        if ":" not in value and "." not in value:
            raise ValueError(f"ref {value!r} must name a module and an attribute")
        return value


class PluginManifest(BaseModel):
    """Ordered list of plugins to apply to a host."""

    model_config = ConfigDict(extra="forbid")

    plugins: list[PluginSpec] = Field(default_factory=list)
    entrypoint_groups: list[str] = Field(default_factory=list)

    @property
    def enabled_plugins(self) -> list[PluginSpec]:
        """Enabled entries, in declared order."""
        return [spec for spec in self.plugins if spec.enabled]

    @classmethod
    def from_yaml(cls, source: Union[str, Path]) -> PluginManifest:
        """Load a manifest from a YAML file path or a YAML string.

        A string is treated as a path when such a file exists, and as raw
        YAML otherwise.  An empty document yields an empty manifest.

        Raises
        ------
        ValueError
            If the document is not valid YAML or not a mapping.
        pydantic.ValidationError
            If the mapping does not match the manifest schema.
        """
        if isinstance(source, Path):
            text = source.read_text(encoding="utf-8")
        else:
            path = Path(source)
            try:
                is_file = path.is_file()
            except OSError:
                is_file = False
            text = path.read_text(encoding="utf-8") if is_file else source

        try:
            data: Any = yaml.safe_load(io.StringIO(text))
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid plugin manifest YAML: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("Plugin manifest YAML must be a mapping.")
        return cls.model_validate(data)


def apply_manifest(host: Any, manifest: PluginManifest) -> Any:
    """``use`` every enabled plugin, then every entry-point group, on *host*.

    References are all resolved before the first plugin runs, so a bad
    reference leaves *host* untouched.

    Returns
    -------
    Any
        *host*, for chaining.
    """
    attach(host)
    plugins = [resolve_plugin(spec.ref) for spec in manifest.enabled_plugins]
    for plugin in plugins:
        host.use(plugin)
    for group in manifest.entrypoint_groups:
        use_entrypoints(host, group)
    logger.debug(
        "Applied %d manifest plugin(s) and %d entry-point group(s) to %s",
        len(plugins),
        len(manifest.entrypoint_groups),
        type(host).__name__,
    )
    return host

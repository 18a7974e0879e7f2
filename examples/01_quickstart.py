#!/usr/bin/env python3
"""Example: Quickstart — plugin-use

Minimal working example: make an app pluggable, register plugins, and
replay the deferred ones onto a config object.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install plugin-use
"""
from __future__ import annotations

import plugin_use
from plugin_use import Pluggable, attach


class App:
    pass


def settings_plugin(app):
    app.settings = {"debug": False}

    # Returned callables are deferred and replayed by app.run(...)
    def apply_settings(target):
        target.settings = dict(app.settings)

    return apply_settings


def banner_plugin(app):
    app.banner = "hello"


class Config(Pluggable):
    pass


def main() -> None:
    print(f"plugin-use version: {plugin_use.__version__}")

    # Step 1: attach use/run to an arbitrary object
    app = App()
    attach(app)
    app.use(settings_plugin).use(banner_plugin)
    print(f"Deferred plugins: {len(app.deferred)}")

    # Step 2: replay deferred plugins onto a plain object
    config = App()
    app.run(config)
    print(f"Plain target settings: {config.settings}")

    # Step 3: replay onto a Pluggable subclass
    typed = Config()
    app.run(typed)
    print(f"Pluggable target: {typed!r}, settings={typed.settings}")


if __name__ == "__main__":
    main()

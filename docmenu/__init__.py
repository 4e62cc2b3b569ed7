"""Public package surface for docmenu.

Exports ``main`` for programmatic CLI invocation and ``Menu`` for embedding
a menu build in other tools. Implementation lives in the submodules.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def __getattr__(name: str):
    if name == "Menu":
        from .menu import Menu

        return Menu
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["main", "Menu"]

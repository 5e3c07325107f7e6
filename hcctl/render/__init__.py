"""hcctl.render registry."""

from __future__ import annotations

from hcctl.render.json import JsonRenderer
from hcctl.render.table import TableRenderer

_RENDERERS = {
    "json": JsonRenderer(),
    "table": TableRenderer(),
}

RENDERER_NAMES = sorted(_RENDERERS)


def get_renderer(name: str):
    if name not in _RENDERERS:
        raise ValueError(f"unknown renderer: {name}")
    return _RENDERERS[name]

"""
hcctl.render.base
AUTHOR: carter-vin

Renderer interface
"""

from __future__ import annotations

from typing import Sequence


class Renderer:
    name: str = "base"

    def render(self, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
        raise NotImplementedError

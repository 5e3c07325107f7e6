"""
hcctl.render.json
AUTHOR: carter-vin

JSON renderer: one object per row keyed by column header
"""

from __future__ import annotations

import json

from hcctl.render.base import Renderer


class JsonRenderer(Renderer):
    name = "json"

    def render(self, headers, rows) -> str:
        payload = [dict(zip(headers, row)) for row in rows]
        return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)

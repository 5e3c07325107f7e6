"""
hcctl.render.table
AUTHOR: carter-vin

Unbordered fixed-column table renderer
"""

from __future__ import annotations

from hcctl.render.base import Renderer


class TableRenderer(Renderer):
    name = "table"

    def render(self, headers, rows) -> str:
        all_rows = [list(headers)] + [list(row) for row in rows]

        widths = [max(len(row[i]) for row in all_rows) for i in range(len(headers))]
        lines: list[str] = []

        for index, row in enumerate(all_rows):
            padded = [row[i].ljust(widths[i]) for i in range(len(headers))]
            lines.append(" | ".join(padded).rstrip())
            if index == 0:
                # Title separator, no outer border
                lines.append("-+-".join("-" * width for width in widths))

        return "\n".join(lines)

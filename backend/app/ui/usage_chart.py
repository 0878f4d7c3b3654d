"""Used/available donut chart of a user's storage quota."""

from __future__ import annotations

import math
from xml.sax.saxutils import escape

from app.constants import STORAGE_QUOTA_BYTES
from app.schemas.usage import ChartSegment, UsageChart
from app.utils.files import calculate_percentage, convert_file_size

USED_COLOR = "#89ce45"
AVAILABLE_COLOR = "#82ca9d"
TOTAL_LABEL = "2GB"

# Donut geometry (px)
SIZE = 200
INNER_RADIUS = 60
OUTER_RADIUS = 80
CAPTION_HEIGHT = 60


def build_usage_chart(used: int = 0) -> UsageChart:
    """Chart data for ``used`` bytes against the fixed quota.

    ``available`` is not clamped: it goes negative when usage exceeds the
    quota.
    """
    used = used or 0
    available = STORAGE_QUOTA_BYTES - used
    return UsageChart(
        used=used,
        available=available,
        total=STORAGE_QUOTA_BYTES,
        segments=[
            ChartSegment(name="Used", value=used, color=USED_COLOR),
            ChartSegment(name="Available", value=available, color=AVAILABLE_COLOR),
        ],
        used_label=convert_file_size(used) if used else "0GB",
        total_label=TOTAL_LABEL,
        used_percent=calculate_percentage(used, STORAGE_QUOTA_BYTES),
    )


def render_usage_chart_svg(chart: UsageChart) -> str:
    """Render the chart as a standalone SVG document."""
    radius = (INNER_RADIUS + OUTER_RADIUS) / 2
    width = OUTER_RADIUS - INNER_RADIUS
    circumference = 2 * math.pi * radius
    center = SIZE / 2

    # Negative values only occur past the quota; they get no arc
    values = [max(segment.value, 0) for segment in chart.segments]
    total = sum(values) or 1

    arcs = []
    offset = 0.0
    for segment, value in zip(chart.segments, values):
        length = circumference * value / total
        arcs.append(
            f'<circle cx="{center:g}" cy="{center:g}" r="{radius:g}" fill="none" '
            f'stroke="{segment.color}" stroke-width="{width:g}" '
            f'stroke-dasharray="{length:.3f} {circumference:.3f}" '
            f'stroke-dashoffset="{-offset:.3f}" '
            f'transform="rotate(-90 {center:g} {center:g})">'
            f"<title>{escape(segment.name)}: {segment.value}</title></circle>"
        )
        offset += length

    caption = f"{chart.used_label} / {chart.total_label}"
    height = SIZE + CAPTION_HEIGHT
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{SIZE}" height="{height}" '
        f'viewBox="0 0 {SIZE} {height}">'
        + "".join(arcs)
        + f'<text x="{center:g}" y="{SIZE + 22}" text-anchor="middle" font-weight="bold">SPACE USED</text>'
        + f'<text x="{center:g}" y="{SIZE + 46}" text-anchor="middle">{escape(caption)}</text>'
        + "</svg>"
    )

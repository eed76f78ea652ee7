"""
Viewport Controller.

Holds pan offset and zoom scale for a rendered scene. The transform maps
diagram units to screen units as `screen = diagram * scale + pan`; it never
touches node positions.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from ..config import (
    DEFAULT_MARGIN,
    DEFAULT_MAX_SCALE,
    DEFAULT_MIN_SCALE,
    DEFAULT_ZOOM_STEP,
)
from .connectors import format_number


@dataclass(frozen=True)
class ViewportState:
    pan_x: float = 0.0
    pan_y: float = 0.0
    scale: float = 1.0


class ViewportController:
    """
    Pan/zoom state with a clamped scale.

    Out-of-range zoom requests are clamped silently.
    """

    def __init__(self, min_scale: float = DEFAULT_MIN_SCALE,
                 max_scale: float = DEFAULT_MAX_SCALE,
                 zoom_step: float = DEFAULT_ZOOM_STEP,
                 margin: float = DEFAULT_MARGIN,
                 state: ViewportState | None = None):
        if min_scale <= 0 or min_scale > max_scale:
            raise ValueError(f"Invalid zoom bounds: [{min_scale}, {max_scale}]")
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.zoom_step = zoom_step
        self.margin = margin
        self.state = state or ViewportState()
        self.state = replace(self.state, scale=self._clamp(self.state.scale))

    def _clamp(self, scale: float) -> float:
        return min(self.max_scale, max(self.min_scale, scale))

    @property
    def scale(self) -> float:
        return self.state.scale

    def pan(self, dx: float, dy: float) -> ViewportState:
        self.state = replace(self.state, pan_x=self.state.pan_x + dx,
                             pan_y=self.state.pan_y + dy)
        return self.state

    def zoom_to(self, scale: float) -> ViewportState:
        self.state = replace(self.state, scale=self._clamp(scale))
        return self.state

    def zoom_by(self, delta: float) -> ViewportState:
        return self.zoom_to(self.state.scale + delta)

    def zoom_in(self) -> ViewportState:
        return self.zoom_by(self.zoom_step)

    def zoom_out(self) -> ViewportState:
        return self.zoom_by(-self.zoom_step)

    def reset(self) -> ViewportState:
        self.state = ViewportState(scale=self._clamp(1.0))
        return self.state

    def center_on(self, content_width: float, content_height: float,
                  viewport_width: float, viewport_height: float) -> ViewportState:
        """
        Pan so the content sits in view at the current scale.

        Content narrower than the viewport is centered horizontally; wider
        content is pinned at the margin. The tree grows downward, so the
        vertical pan is always the margin.
        """
        scaled_width = content_width * self.state.scale
        if scaled_width < viewport_width:
            pan_x = (viewport_width - scaled_width) / 2
        else:
            pan_x = self.margin
        self.state = replace(self.state, pan_x=pan_x, pan_y=self.margin)
        return self.state

    def fit(self, content_width: float, content_height: float,
            viewport_width: float, viewport_height: float) -> ViewportState:
        """Largest clamped scale showing all content inside the margins, then center."""
        usable_w = max(viewport_width - 2 * self.margin, 0.0)
        usable_h = max(viewport_height - 2 * self.margin, 0.0)
        ratios = []
        if content_width > 0:
            ratios.append(usable_w / content_width)
        if content_height > 0:
            ratios.append(usable_h / content_height)
        scale = min(ratios) if ratios else 1.0
        self.zoom_to(scale)
        return self.center_on(content_width, content_height, viewport_width, viewport_height)

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        s = self.state
        return x * s.scale + s.pan_x, y * s.scale + s.pan_y

    def to_diagram(self, x: float, y: float) -> Tuple[float, float]:
        s = self.state
        return (x - s.pan_x) / s.scale, (y - s.pan_y) / s.scale

    def transform(self) -> str:
        """SVG transform attribute for the scene group."""
        s = self.state
        return (f"translate({format_number(s.pan_x)} {format_number(s.pan_y)}) "
                f"scale({format_number(s.scale)})")

"""
Progress mapping for a scrubbable playback bar.

Converts pointer coordinates into a normalized play position and normalized
positions into the fill element's trailing-edge offset. ``ProgressBar`` keeps
the interaction state of a scrub bar (pointer down/drag/up, hover grow and
shrink) without depending on any UI toolkit.
"""

import logging
import math
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

# Exponential easing factor applied per visual tick
HOVER_ANIM_SPEED = 0.05
# Distance to the target scale at which the animation snaps and stops
HOVER_SNAP_DISTANCE = 0.001
DEFAULT_HOVER_SIZE = 3.0


def _resolve_coordinate(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def pointer_to_normalized(pointer_x, bar_origin_x: float, bar_width_px: float) -> float:
    """
    Map a pointer x coordinate to a normalized position along the bar.

    The result is not clamped: a pointer left of the bar gives a negative
    value and one right of the bar gives a value above 1.

    Args:
        pointer_x: Pointer x coordinate in the bar's coordinate space
        bar_origin_x: x coordinate of the bar's left edge
        bar_width_px: Bar width

    Returns:
        ``(pointer_x - bar_origin_x) / bar_width_px``, or 0.0 if the width is
        not positive or the pointer cannot be resolved

    Example:
        >>> pointer_to_normalized(50, 0, 200)
        0.25
        >>> pointer_to_normalized(300, 0, 200)
        1.5
    """
    x = _resolve_coordinate(pointer_x)
    origin = _resolve_coordinate(bar_origin_x)
    width = _resolve_coordinate(bar_width_px)
    if x is None or origin is None or width is None:
        return 0.0
    if width <= 0:
        return 0.0
    return (x - origin) / width


def normalized_to_fill_offset(normalized: float, bar_width_px: float) -> float:
    """
    Compute the fill element's trailing-edge inset from the bar's full width.

    Not clamped: ``normalized > 1`` gives a positive inset (overshoot) and
    ``normalized < 0`` an inset larger than the bar (undershoot).

    Example:
        >>> normalized_to_fill_offset(0.25, 200)
        -150.0
    """
    return -(1 - normalized) * bar_width_px


def clamp01(value: float) -> float:
    """Clamp a normalized position to [0, 1]."""
    return max(0.0, min(1.0, value))


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class HoverAnimator:
    """
    Ease the bar's height and playhead width toward their hover targets.

    Call ``tick()`` once per visual frame; it does nothing unless growing or
    shrinking. Once the bar scale is within HOVER_SNAP_DISTANCE of its
    target, both scales snap to the exact target and the flag is cleared.
    """

    def __init__(self, hover_size: float = DEFAULT_HOVER_SIZE, speed: float = HOVER_ANIM_SPEED):
        self.hover_size = hover_size
        self.speed = speed
        self.bar_scale_y = 1.0
        self.playhead_scale_x = 1.0
        self.growing = False
        self.shrinking = False

    @property
    def animating(self) -> bool:
        return self.growing or self.shrinking

    def grow(self) -> None:
        self.shrinking = False
        self.growing = True
        self._step(self.hover_size, self.hover_size / 2)

    def shrink(self) -> None:
        self.growing = False
        self.shrinking = True
        self._step(1.0, 1.0)

    def tick(self) -> None:
        if self.growing:
            self._step(self.hover_size, self.hover_size / 2)
        elif self.shrinking:
            self._step(1.0, 1.0)

    def _step(self, bar_target: float, playhead_target: float) -> None:
        self.bar_scale_y = _lerp(self.bar_scale_y, bar_target, self.speed)
        self.playhead_scale_x = _lerp(self.playhead_scale_x, playhead_target, self.speed)

        if abs(self.bar_scale_y - bar_target) < HOVER_SNAP_DISTANCE:
            self.bar_scale_y = bar_target
            self.playhead_scale_x = playhead_target
            self.growing = False
            self.shrinking = False


PositionListener = Callable[[float], None]


class ProgressBar:
    """
    Scrub bar interaction state.

    Pointer events are mapped to an unclamped normalized position, which is
    passed unchanged to the registered listeners. The painted fill uses the
    clamped position.

    Args:
        rect_width: Bar width in local units
        scale_x: Horizontal scale applied to the bar
        origin_x: x coordinate of the bar's left edge
        hover_size: Vertical scale of the bar while hovered
    """

    def __init__(
        self,
        rect_width: float,
        scale_x: float = 1.0,
        origin_x: float = 0.0,
        hover_size: float = DEFAULT_HOVER_SIZE,
    ):
        self.width = rect_width * scale_x
        self.origin_x = origin_x
        self.progress = 0.0
        self.fill_offset = normalized_to_fill_offset(0.0, self.width)
        self.dragging = False
        self.hovering = False
        self.hover = HoverAnimator(hover_size=hover_size)
        self._down_listeners: List[PositionListener] = []
        self._drag_listeners: List[PositionListener] = []
        self._up_listeners: List[PositionListener] = []

    # Listener registration

    def on_down(self, listener: PositionListener) -> None:
        self._down_listeners.append(listener)

    def on_drag(self, listener: PositionListener) -> None:
        self._drag_listeners.append(listener)

    def on_up(self, listener: PositionListener) -> None:
        self._up_listeners.append(listener)

    # Geometry

    def value_from_pointer(self, pointer_x) -> float:
        return pointer_to_normalized(pointer_x, self.origin_x, self.width)

    def set_bar_progress(self, normalized: float) -> None:
        """Record a play position and update the painted fill (clamped)."""
        self.progress = normalized
        self.fill_offset = normalized_to_fill_offset(clamp01(normalized), self.width)

    # Pointer events

    def on_pointer_enter(self) -> None:
        self.hovering = True
        self.hover.grow()

    def on_pointer_exit(self) -> None:
        self.hovering = False
        if not self.dragging:
            self.hover.shrink()

    def on_pointer_down(self, pointer_x) -> float:
        self.dragging = True
        return self._emit(pointer_x, self._down_listeners)

    def on_pointer_drag(self, pointer_x) -> float:
        return self._emit(pointer_x, self._drag_listeners)

    def on_pointer_up(self, pointer_x) -> float:
        self.dragging = False
        if not self.hovering:
            self.hover.shrink()
        return self._emit(pointer_x, self._up_listeners)

    def tick(self) -> None:
        """Advance the hover animation by one visual frame."""
        self.hover.tick()

    def _emit(self, pointer_x, listeners: List[PositionListener]) -> float:
        normalized = self.value_from_pointer(pointer_x)
        self.set_bar_progress(normalized)
        for listener in listeners:
            listener(normalized)
        return normalized

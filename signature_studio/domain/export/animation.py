"""
Animation curves for baked element animations.

Each curve is a pure function of progress in [0, 1] returning the visual state
of the element for that frame. The frame renderer calls the element's base
draw once per frame with that state.
"""

import math
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from ...config import GIF_FRAME_COUNT, GIF_FRAME_DURATION_MS


@dataclass(frozen=True)
class FrameState:
    opacity: float = 1.0
    scale: float = 1.0
    # Fraction of the element's width that is visible, left to right
    reveal: float = 1.0
    # Horizontal position of a highlight band, None when there is no band
    sweep: Optional[float] = None


@dataclass(frozen=True)
class FrameConfig:
    frame_count: int = GIF_FRAME_COUNT
    frame_duration_ms: int = GIF_FRAME_DURATION_MS

    def __post_init__(self):
        if self.frame_count < 2:
            raise ValueError("frame_count must be at least 2")
        if self.frame_duration_ms <= 0:
            raise ValueError("frame_duration_ms must be positive")


AnimationCurve = Callable[[float], FrameState]


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def fade_in(progress: float) -> FrameState:
    return FrameState(opacity=_clamp(progress))


def pulse(progress: float) -> FrameState:
    """Gentle breathing loop; first and last frames match"""
    cycle = math.fmod(progress * 2, 2)
    pulse_progress = cycle if cycle <= 1 else 2 - cycle
    return FrameState(
        opacity=0.8 + 0.2 * (1 - pulse_progress),
        scale=1 + 0.05 * pulse_progress,
    )


# (start, end, opacity at start, opacity at end)
CROSS_DISSOLVE_SEGMENTS = (
    (0.0, 0.25, 0.0, 0.3),
    (0.25, 0.5, 0.3, 0.7),
    (0.5, 0.75, 0.7, 0.9),
    (0.75, 1.0, 0.9, 1.0),
)


def cross_dissolve(progress: float) -> FrameState:
    p = _clamp(progress)
    for start, end, low, high in CROSS_DISSOLVE_SEGMENTS:
        if p <= end:
            return FrameState(opacity=low + (p - start) / (end - start) * (high - low))
    return FrameState(opacity=1.0)


def zoom_in(progress: float) -> FrameState:
    eased = _ease_out_cubic(_clamp(progress))
    return FrameState(opacity=eased, scale=0.8 + 0.2 * eased)


def block_reveal(progress: float) -> FrameState:
    return FrameState(reveal=_ease_out_cubic(_clamp(progress)))


def highlight_sweep(progress: float) -> FrameState:
    # Band enters from the left edge and leaves past the right edge
    return FrameState(sweep=-0.2 + 1.4 * _clamp(progress))


def stick_on(progress: float) -> FrameState:
    """Sticker press: drops in oversized, settles at full size"""
    p = _clamp(progress)
    settle = _clamp(p / 0.7)
    return FrameState(opacity=settle, scale=1.2 - 0.2 * _ease_out_cubic(settle))


ANIMATION_CURVES: dict[str, AnimationCurve] = {
    "fade-in": fade_in,
    "pulse": pulse,
    "cross-dissolve": cross_dissolve,
    "zoom-in": zoom_in,
    "block-reveal": block_reveal,
    "test-sweep": highlight_sweep,
    "stick-on": stick_on,
}


def get_curve(name: str) -> AnimationCurve:
    try:
        return ANIMATION_CURVES[name]
    except KeyError:
        raise ValueError(f"Unknown animation '{name}'") from None


def frame_progressions(frame_count: int) -> Iterator[float]:
    """Progress value for every frame, first frame 0 and last frame 1"""
    for index in range(frame_count):
        yield index / (frame_count - 1)


def render_frame(curve: AnimationCurve, progress: float, base_draw: Callable[[FrameState], None]) -> None:
    """Draw one frame: evaluate the curve and redraw the element from scratch"""
    base_draw(curve(progress))

"""Per-frame redraw of a captured element on a Pillow canvas"""

from typing import Callable, Optional

from PIL import Image, ImageColor, ImageDraw

from .animation import AnimationCurve, FrameConfig, FrameState, frame_progressions, render_frame

SWEEP_BAND_WIDTH = 0.2
SWEEP_BAND_FILL = (255, 255, 255, 110)


class ElementCanvas:
    """
    Drawing surface sized to one element's bounding box.

    ``draw`` wipes the surface back to the element's backdrop and repaints
    the element sprite for a frame state, so every frame is complete on its
    own. The backdrop is whatever the page paints behind the element, laid
    over the layout background; GIF has no partial alpha.
    """

    def __init__(
        self,
        sprite: Image.Image,
        background: str = "#ffffff",
        backdrop: Optional[Image.Image] = None,
    ):
        self.sprite = sprite.convert("RGBA")
        self.size = self.sprite.size
        self.base = Image.new("RGBA", self.size, ImageColor.getrgb(background)[:3] + (255,))
        if backdrop is not None:
            backdrop = backdrop.convert("RGBA")
            if backdrop.size != self.size:
                backdrop = backdrop.resize(self.size, Image.Resampling.LANCZOS)
            self.base.alpha_composite(backdrop)
        self.surface = self.base.copy()

    def _layer(self, state: FrameState) -> Image.Image:
        width, height = self.size
        layer = Image.new("RGBA", self.size, (0, 0, 0, 0))

        sprite = self.sprite
        if state.scale != 1:
            scaled_size = (max(1, round(width * state.scale)), max(1, round(height * state.scale)))
            sprite = sprite.resize(scaled_size, Image.Resampling.LANCZOS)
        offset = ((width - sprite.width) // 2, (height - sprite.height) // 2)
        layer.paste(sprite, offset, sprite)

        if state.reveal < 1:
            cut = max(0, round(width * state.reveal))
            layer.paste((0, 0, 0, 0), (cut, 0, width, height))

        if state.opacity < 1:
            opacity = max(0.0, state.opacity)
            alpha = layer.getchannel("A").point(lambda a: round(a * opacity))
            layer.putalpha(alpha)
        return layer

    def draw(self, state: FrameState) -> None:
        self.surface.paste(self.base, (0, 0))
        self.surface.alpha_composite(self._layer(state))

        if state.sweep is not None:
            width, height = self.size
            band = Image.new("RGBA", self.size, (0, 0, 0, 0))
            left = round(width * state.sweep)
            right = round(width * (state.sweep + SWEEP_BAND_WIDTH))
            ImageDraw.Draw(band).rectangle([left, 0, right, height], fill=SWEEP_BAND_FILL)
            self.surface.alpha_composite(band)

    def snapshot(self) -> Image.Image:
        return self.surface.convert("RGB")


def render_frames(
    sprite: Image.Image,
    curve: AnimationCurve,
    frame_config: FrameConfig,
    background: str = "#ffffff",
    before_frame: Optional[Callable[[], None]] = None,
    backdrop: Optional[Image.Image] = None,
) -> list[Image.Image]:
    """Render every frame of an animation in order on a single canvas"""
    canvas = ElementCanvas(sprite, background, backdrop)
    frames = []
    for progress in frame_progressions(frame_config.frame_count):
        if before_frame:
            before_frame()
        render_frame(curve, progress, canvas.draw)
        frames.append(canvas.snapshot())
    return frames

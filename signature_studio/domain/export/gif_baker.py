"""Bake animated signature elements into looping GIFs"""

import logging
import uuid
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from bs4 import BeautifulSoup
from PIL import Image

from ...storage import ObjectStorage
from .animation import FrameConfig, get_curve
from .errors import GifEncodingError, SignatureExportError
from .frame_renderer import render_frames
from .layouts.base import ELEMENT_IDS
from .rendering_pool import Deadline, RenderingSurface

logger = logging.getLogger(__name__)

SOCIAL_CLUSTER_KEY = "socialIcons"


@dataclass(frozen=True)
class BakedElement:
    """A stored GIF and the element it replaces"""

    key: str
    url: str
    width: int
    height: int

    @property
    def platform(self) -> Optional[str]:
        if self.key.startswith(f"{SOCIAL_CLUSTER_KEY}."):
            return self.key.split(".", 1)[1]
        return None


def social_icon_selector(platform: str) -> str:
    return f'#{ELEMENT_IDS[SOCIAL_CLUSTER_KEY]} a[data-platform="{platform}"] img'


def encode_gif(frames: list[Image.Image], frame_duration_ms: int) -> bytes:
    """Encode frames as an infinitely looping GIF with a fixed per-frame delay"""
    if not frames:
        raise GifEncodingError("Cannot encode a GIF without frames")
    buffer = BytesIO()
    try:
        first, *rest = frames
        first.save(
            buffer,
            format="GIF",
            save_all=True,
            append_images=rest,
            duration=frame_duration_ms,
            loop=0,
            disposal=2,
        )
    except Exception as e:
        logger.error(f"❌ GIF encoding failed: {e}")
        raise GifEncodingError(f"Failed to encode GIF: {e}") from e
    return buffer.getvalue()


class ElementBaker:
    """Captures elements from a loaded surface and stores one GIF per element"""

    def __init__(
        self,
        storage: ObjectStorage,
        frame_config: FrameConfig,
        background: str = "#ffffff",
        deadline: Optional[Deadline] = None,
    ):
        self.storage = storage
        self.frame_config = frame_config
        self.background = background
        self.deadline = deadline

    def _timeout(self) -> Optional[float]:
        if self.deadline is None:
            return None
        self.deadline.check()
        return self.deadline.remaining()

    def _capture(
        self, surface: RenderingSurface, selector: str
    ) -> tuple[Optional[Image.Image], Optional[Image.Image]]:
        """Element sprite and the backdrop behind it, both at the element's box"""
        sprite = surface.capture(selector, timeout=self._timeout())
        if sprite is None:
            return None, None
        return sprite, surface.capture_backdrop(selector, timeout=self._timeout())

    def bake_sprite(
        self,
        key: str,
        sprite: Image.Image,
        animation: str,
        backdrop: Optional[Image.Image] = None,
    ) -> BakedElement:
        curve = get_curve(animation)
        frames = render_frames(
            sprite,
            curve,
            self.frame_config,
            self.background,
            before_frame=self.deadline.check if self.deadline else None,
            backdrop=backdrop,
        )
        data = encode_gif(frames, self.frame_config.frame_duration_ms)
        storage_key = f"signature-{key.replace('.', '-').lower()}-{uuid.uuid4().hex}.gif"
        try:
            url = self.storage.put(storage_key, data, "image/gif")
        except Exception as e:
            raise SignatureExportError(f"Failed to store {key} GIF: {e}", stage="storage") from e
        logger.info(f"🎞️ Baked {key} ({animation}, {len(frames)} frames) -> {storage_key}")
        return BakedElement(key=key, url=url, width=sprite.width, height=sprite.height)

    def bake(
        self,
        surface: RenderingSurface,
        element: str,
        animation: str,
        platforms: tuple[str, ...] = (),
    ) -> list[BakedElement]:
        """
        Bake one animated element.

        The social cluster is baked icon by icon so each link keeps its own
        image. When an icon cannot be isolated the whole cluster becomes a
        single image and its links are lost.
        """
        if element == SOCIAL_CLUSTER_KEY:
            return self._bake_social(surface, animation, platforms)

        sprite, backdrop = self._capture(surface, f"#{ELEMENT_IDS[element]}")
        if sprite is None:
            logger.warning(f"⚠️ {element} is animated but not present in the layout, skipping")
            return []
        return [self.bake_sprite(element, sprite, animation, backdrop)]

    def _bake_social(
        self, surface: RenderingSurface, animation: str, platforms: tuple[str, ...]
    ) -> list[BakedElement]:
        if not platforms:
            return []

        captures = {}
        for platform in platforms:
            sprite, backdrop = self._capture(surface, social_icon_selector(platform))
            if sprite is None:
                break
            captures[platform] = (sprite, backdrop)
        else:
            return [
                self.bake_sprite(f"{SOCIAL_CLUSTER_KEY}.{platform}", sprite, animation, backdrop)
                for platform, (sprite, backdrop) in captures.items()
            ]

        logger.warning(
            "⚠️ Social icons could not be captured one by one, flattening the cluster "
            "into a single image without links"
        )
        cluster, backdrop = self._capture(surface, f"#{ELEMENT_IDS[SOCIAL_CLUSTER_KEY]}")
        if cluster is None:
            return []
        return [self.bake_sprite(SOCIAL_CLUSTER_KEY, cluster, animation, backdrop)]


def _raster_tag(soup: BeautifulSoup, baked: BakedElement, alt: str):
    return soup.new_tag(
        "img",
        attrs={
            "src": baked.url,
            "alt": alt,
            "width": str(baked.width),
            "height": str(baked.height),
            "border": "0",
            "style": f"display: block; width: {baked.width}px; height: {baked.height}px;",
        },
    )


def substitute_rasters(html: str, baked: list[BakedElement]) -> str:
    """
    Point each baked element at its GIF.

    Images keep their tag, attributes and any wrapping link; only ``src``
    changes. Non-image elements have their content replaced by the GIF.
    """
    soup = BeautifulSoup(html, "lxml")
    for item in baked:
        if item.platform:
            target = soup.select_one(social_icon_selector(item.platform))
        else:
            target = soup.find(id=ELEMENT_IDS[item.key])
        if target is None:
            logger.warning(f"⚠️ No markup found for baked element {item.key}")
            continue

        if target.name == "img":
            target["src"] = item.url
        else:
            target.clear()
            target.append(_raster_tag(soup, item, item.key))
    return str(soup)


def strip_animation_markup(html: str) -> str:
    """Remove animation classes once the motion lives in the GIFs"""
    soup = BeautifulSoup(html, "lxml")
    for element in soup.find_all(class_=True):
        classes = [c for c in element.get("class", []) if not c.startswith(("animate-", "delay-"))]
        if classes:
            element["class"] = classes
        else:
            del element["class"]
    return str(soup)

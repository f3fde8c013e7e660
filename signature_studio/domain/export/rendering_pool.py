"""Headless rendering surfaces for capturing animated elements"""

import logging
import threading
import time
from contextlib import contextmanager
from io import BytesIO
from typing import Callable, Iterator, Optional, Protocol

from PIL import Image
from playwright.sync_api import sync_playwright

from ...config import (
    CHROMIUM_EXECUTABLE,
    RENDER_ACQUIRE_TIMEOUT_SECONDS,
    RENDER_POOL_SIZE,
    RENDER_VIEWPORT_HEIGHT,
    RENDER_VIEWPORT_WIDTH,
)
from .errors import ExportTimeoutError, RenderingSurfaceError

logger = logging.getLogger(__name__)


class RenderingSurface(Protocol):
    def load(self, html: str, timeout: Optional[float] = None) -> None: ...

    def capture(self, selector: str, timeout: Optional[float] = None) -> Optional[Image.Image]: ...

    def capture_backdrop(
        self, selector: str, timeout: Optional[float] = None
    ) -> Optional[Image.Image]: ...

    def close(self) -> None: ...


def _timeout_ms(timeout: Optional[float]) -> Optional[float]:
    # Playwright reads 0 as "no timeout"
    if timeout is None:
        return None
    return max(1.0, timeout * 1000)


class Deadline:
    """Wall-clock budget shared by every step of one export"""

    def __init__(self, seconds: float):
        self.seconds = seconds
        self.expires_at = time.monotonic() + seconds

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    def check(self) -> None:
        if time.monotonic() >= self.expires_at:
            raise ExportTimeoutError(f"Export exceeded the {self.seconds:g}s time limit")


class PlaywrightSurface:
    """
    One headless Chromium page.

    The sync Playwright API is bound to the thread that started it, so a
    surface must be created, used and closed on the same thread.
    """

    def __init__(
        self,
        viewport_width: int = RENDER_VIEWPORT_WIDTH,
        viewport_height: int = RENDER_VIEWPORT_HEIGHT,
        executable_path: Optional[str] = CHROMIUM_EXECUTABLE,
    ):
        self._playwright = None
        self._browser = None
        self._page = None
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                executable_path=executable_path,
                args=["--no-sandbox", "--disable-dev-shm-usage"],
            )
            self._page = self._browser.new_page(
                viewport={"width": viewport_width, "height": viewport_height},
                device_scale_factor=1,
            )
        except Exception as e:
            logger.error(f"❌ Failed to launch headless browser: {e}")
            self.close()
            raise RenderingSurfaceError(f"Failed to launch rendering surface: {e}") from e

    def load(self, html: str, timeout: Optional[float] = None) -> None:
        try:
            self._page.set_content(html, wait_until="networkidle", timeout=_timeout_ms(timeout))
        except Exception as e:
            raise RenderingSurfaceError(f"Failed to load signature markup: {e}") from e

    def _screenshot(self, locator, timeout: Optional[float]) -> Image.Image:
        png = locator.screenshot(
            omit_background=True, animations="disabled", timeout=_timeout_ms(timeout)
        )
        image = Image.open(BytesIO(png))
        image.load()
        return image

    def capture(self, selector: str, timeout: Optional[float] = None) -> Optional[Image.Image]:
        """Screenshot an element at its own bounding box, None if it is not on the page"""
        try:
            locator = self._page.locator(selector)
            if locator.count() == 0:
                return None
            return self._screenshot(locator.first, timeout)
        except Exception as e:
            raise RenderingSurfaceError(f"Failed to capture '{selector}': {e}") from e

    def capture_backdrop(
        self, selector: str, timeout: Optional[float] = None
    ) -> Optional[Image.Image]:
        """
        Screenshot what lies behind an element: the same box with the element
        itself made fully transparent.
        """
        try:
            locator = self._page.locator(selector)
            if locator.count() == 0:
                return None
            element = locator.first
            previous = element.evaluate(
                "el => { const prev = el.style.opacity; el.style.opacity = '0'; return prev; }"
            )
            try:
                return self._screenshot(element, timeout)
            finally:
                element.evaluate("(el, prev) => { el.style.opacity = prev; }", previous)
        except Exception as e:
            raise RenderingSurfaceError(f"Failed to capture backdrop of '{selector}': {e}") from e

    def close(self) -> None:
        if self._browser is not None:
            try:
                self._browser.close()
            except Exception as e:
                logger.warning(f"⚠️ Failed to close headless browser: {e}")
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception as e:
                logger.warning(f"⚠️ Failed to stop playwright: {e}")
        self._page = self._browser = self._playwright = None


class RenderingSurfacePool:
    """
    Bounded pool of rendering surfaces.

    ``acquire`` blocks for a free slot, launches a surface and always closes
    it and frees the slot on exit, whether the caller succeeded or raised.
    """

    def __init__(
        self,
        max_surfaces: int = RENDER_POOL_SIZE,
        launcher: Optional[Callable[[], RenderingSurface]] = None,
        acquire_timeout: float = RENDER_ACQUIRE_TIMEOUT_SECONDS,
    ):
        self.max_surfaces = max_surfaces
        self.acquire_timeout = acquire_timeout
        self._launcher = launcher or PlaywrightSurface
        self._slots = threading.BoundedSemaphore(max_surfaces)
        self._lock = threading.Lock()
        self._in_use = 0

    @property
    def in_use(self) -> int:
        return self._in_use

    @contextmanager
    def acquire(self, deadline: Optional[Deadline] = None) -> Iterator[RenderingSurface]:
        wait = self.acquire_timeout
        if deadline is not None:
            wait = min(wait, deadline.remaining())
        if not self._slots.acquire(timeout=wait):
            if deadline is not None:
                deadline.check()
            raise RenderingSurfaceError("No rendering surface available")

        surface = None
        try:
            try:
                surface = self._launcher()
            except RenderingSurfaceError:
                raise
            except Exception as e:
                raise RenderingSurfaceError(f"Failed to launch rendering surface: {e}") from e
            with self._lock:
                self._in_use += 1
            logger.info(f"🖥️ Rendering surface acquired ({self._in_use}/{self.max_surfaces})")
            yield surface
        finally:
            if surface is not None:
                try:
                    surface.close()
                finally:
                    with self._lock:
                        self._in_use -= 1
            self._slots.release()

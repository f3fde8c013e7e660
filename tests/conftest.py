from __future__ import annotations

import os
from typing import Optional

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PUBLIC_BASE_URL", "https://sig.example.com")

import pytest
from PIL import Image

from signature_studio.domain.export.animation import FrameConfig
from signature_studio.domain.export.errors import RenderingSurfaceError
from signature_studio.domain.export.orchestrator import SignatureExporter
from signature_studio.domain.export.rendering_pool import RenderingSurfacePool
from signature_studio.domain.signatures.schemas import SignatureRecord

BASE_URL = "https://sig.example.com"

FULL_SOCIAL = {
    "linkedin": "https://linkedin.com/in/jane",
    "twitter": "https://twitter.com/jane",
    "instagram": "https://instagram.com/jane",
    "youtube": "https://youtube.com/@jane",
    "tiktok": "https://tiktok.com/@jane",
}


def make_signature(**overrides) -> SignatureRecord:
    data = {
        "id": "sig-1",
        "templateId": "professional",
        "personalInfo": {
            "name": "Jane Doe",
            "title": "Head of Sales",
            "company": "Acme Corp",
            "email": "jane@acme.test",
            "phone": "+1 555 0100",
            "website": "acme.test",
        },
    }
    data.update(overrides)
    return SignatureRecord(**data)


class InMemoryStorage:
    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}

    def put(self, key: str, data: bytes, content_type: str) -> str:
        self.objects[key] = (data, content_type)
        return f"https://cdn.example.com/{key}"


class FakeSurface:
    """Stands in for a headless browser page; every element is a 40x30 red box"""

    def __init__(
        self,
        missing: tuple[str, ...] = (),
        fail_on_capture: bool = False,
        backdrop: Optional[tuple[int, int, int, int]] = None,
    ) -> None:
        self.missing = missing
        self.fail_on_capture = fail_on_capture
        self.backdrop = backdrop
        self.loaded: Optional[str] = None
        self.captured: list[str] = []
        self.backdrops: list[str] = []
        self.timeouts: list[Optional[float]] = []
        self.closed = False

    def load(self, html: str, timeout: Optional[float] = None) -> None:
        self.loaded = html

    def capture(self, selector: str, timeout: Optional[float] = None) -> Optional[Image.Image]:
        if self.fail_on_capture:
            raise RenderingSurfaceError("capture crashed")
        self.captured.append(selector)
        self.timeouts.append(timeout)
        if any(part in selector for part in self.missing):
            return None
        return Image.new("RGBA", (40, 30), (220, 40, 40, 255))

    def capture_backdrop(
        self, selector: str, timeout: Optional[float] = None
    ) -> Optional[Image.Image]:
        self.backdrops.append(selector)
        if self.backdrop is None:
            return None
        return Image.new("RGBA", (40, 30), self.backdrop)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def pool(surface: FakeSurface) -> RenderingSurfacePool:
    return RenderingSurfacePool(max_surfaces=1, launcher=lambda: surface, acquire_timeout=1)


@pytest.fixture
def exporter(pool: RenderingSurfacePool, storage: InMemoryStorage) -> SignatureExporter:
    return SignatureExporter(
        pool=pool,
        storage=storage,
        base_url=BASE_URL,
        frame_config=FrameConfig(frame_count=5, frame_duration_ms=100),
        timeout_seconds=30,
    )

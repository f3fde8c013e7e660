import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./signature_studio.db")

# Public origin used to turn stored image paths and baked GIFs into absolute URLs.
# Email clients fetch images from the recipient's machine, so this must be reachable.
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000").rstrip("/")

# Frontend base URL for CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# Object storage: "local" writes under UPLOAD_DIR, "r2" uses Cloudflare R2
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local").lower()
UPLOAD_DIR = os.getenv("UPLOAD_DIR", str(Path(__file__).resolve().parent.parent / "uploads"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

# Cloudflare R2 Configuration
R2_ACCOUNT_ID = os.getenv("R2_ACCOUNT_ID")
R2_ACCESS_KEY_ID = os.getenv("R2_ACCESS_KEY_ID")
R2_SECRET_ACCESS_KEY = os.getenv("R2_SECRET_ACCESS_KEY")
R2_BUCKET_NAME = os.getenv("R2_BUCKET_NAME", "signature-studio")
# Public bucket domain; when unset, presigned URLs are issued instead
R2_PUBLIC_URL = os.getenv("R2_PUBLIC_URL")

# Animated export
GIF_FRAME_COUNT = int(os.getenv("GIF_FRAME_COUNT", "20"))
GIF_FRAME_DURATION_MS = int(os.getenv("GIF_FRAME_DURATION_MS", "150"))

# Headless rendering surfaces
RENDER_POOL_SIZE = int(os.getenv("RENDER_POOL_SIZE", "2"))
RENDER_ACQUIRE_TIMEOUT_SECONDS = float(os.getenv("RENDER_ACQUIRE_TIMEOUT_SECONDS", "30"))
RENDER_VIEWPORT_WIDTH = int(os.getenv("RENDER_VIEWPORT_WIDTH", "800"))
RENDER_VIEWPORT_HEIGHT = int(os.getenv("RENDER_VIEWPORT_HEIGHT", "600"))
CHROMIUM_EXECUTABLE = os.getenv("CHROMIUM_EXECUTABLE") or None

# Whole animated export must finish within this many seconds
EXPORT_TIMEOUT_SECONDS = float(os.getenv("EXPORT_TIMEOUT_SECONDS", "60"))

import logging
import uuid

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import FileResponse, RedirectResponse

from ..config import MAX_UPLOAD_BYTES
from ..schemas import UploadResponse
from ..storage import LocalObjectStorage, R2ObjectStorage, generate_presigned_url, get_storage, validate_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Upload"])

# Allowed image types for signature images
ALLOWED_IMAGE_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
    "image/gif": "gif",
    "image/svg+xml": "svg",
}


@router.post("/upload", response_model=UploadResponse)
async def upload_image(file: UploadFile = File(...)):
    """Upload a headshot, logo or background image."""
    logger.info(f"📤 Uploading image: {file.filename} ({file.content_type})")

    extension = ALLOWED_IMAGE_TYPES.get(file.content_type or "")
    if not extension:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only PNG, JPEG, WebP, GIF, and SVG images are allowed.",
        )

    contents = await file.read()
    if not contents:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if len(contents) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=400,
            detail=f"File size exceeds {MAX_UPLOAD_BYTES // (1024 * 1024)}MB limit. "
            f"Your file is {len(contents) / (1024 * 1024):.2f}MB.",
        )

    key = f"upload-{uuid.uuid4().hex}.{extension}"
    storage = get_storage()
    try:
        url = storage.put(key, contents, file.content_type)
    except Exception as e:
        logger.error(f"❌ Failed to store upload {key}: {e}")
        raise HTTPException(status_code=500, detail="Failed to store uploaded file") from e

    path = f"/api/files/{key}" if isinstance(storage, LocalObjectStorage) else None
    logger.info(f"✅ Stored upload as {key}")
    return UploadResponse(url=url, key=key, path=path)


@router.get("/files/{filename}")
async def get_file(filename: str):
    """Serve a stored upload or baked GIF."""
    try:
        validate_key(filename)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid filename") from None

    storage = get_storage()
    if isinstance(storage, R2ObjectStorage):
        return RedirectResponse(generate_presigned_url(filename, client=storage.client, bucket=storage.bucket))

    path = storage.path_for(filename)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")
    # Baked GIFs are immutable, names are unique per export
    return FileResponse(path, headers={"Cache-Control": "public, max-age=31536000, immutable"})

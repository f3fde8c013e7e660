"""Signature router - FastAPI endpoints for signature CRUD and export"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ...database import get_db
from ...schemas import MessageResponse
from ..export.orchestrator import SignatureExporter
from .schemas import (
    ExportRequest,
    ExportResponse,
    InlineExportResponse,
    MjmlExportResponse,
    SignatureCreate,
    SignatureRecord,
    SignatureUpdate,
    ValidationReport,
)
from .service import SignatureService, get_signature_exporter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/signatures", tags=["Signatures"])


def get_signature_service(db: Session = Depends(get_db)) -> SignatureService:
    """Dependency injection for SignatureService"""
    return SignatureService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.post("", response_model=SignatureRecord, status_code=201)
async def create_signature(
    data: SignatureCreate,
    service: SignatureService = Depends(get_signature_service),
):
    return service.create_signature(data)


@router.get("/user/{owner_id}", response_model=list[SignatureRecord])
async def list_signatures(
    owner_id: str,
    service: SignatureService = Depends(get_signature_service),
):
    """Get all signatures saved by an owner"""
    return service.list_signatures(owner_id)


@router.get("/{signature_id}", response_model=SignatureRecord)
async def get_signature(
    signature_id: str,
    service: SignatureService = Depends(get_signature_service),
):
    return service.get_record(signature_id)


@router.patch("/{signature_id}", response_model=SignatureRecord)
async def update_signature(
    signature_id: str,
    data: SignatureUpdate,
    service: SignatureService = Depends(get_signature_service),
):
    return service.update_signature(signature_id, data)


@router.delete("/{signature_id}", response_model=MessageResponse)
async def delete_signature(
    signature_id: str,
    service: SignatureService = Depends(get_signature_service),
):
    service.delete_signature(signature_id)
    return MessageResponse(message="Signature deleted")


# ============================================================================
# PREVIEW & EXPORT
# ============================================================================


@router.get("/{signature_id}/preview", response_class=HTMLResponse)
async def preview_signature(
    signature_id: str,
    service: SignatureService = Depends(get_signature_service),
    exporter: SignatureExporter = Depends(get_signature_exporter),
):
    """Raw layout HTML, including placeholder text for empty fields"""
    record = service.get_record(signature_id)
    return HTMLResponse(exporter.preview(record))


@router.post("/{signature_id}/export", response_model=ExportResponse)
async def export_signature(
    signature_id: str,
    request: Optional[ExportRequest] = None,
    service: SignatureService = Depends(get_signature_service),
    exporter: SignatureExporter = Depends(get_signature_exporter),
):
    """Export email-ready HTML, baking animated elements into GIFs"""
    record = service.get_record(signature_id)
    email_client = request.emailClient if request else "gmail"
    logger.info(f"📤 Exporting signature {signature_id} for {email_client}")

    # Rendering surfaces block, keep them off the event loop
    result = await asyncio.to_thread(exporter.export, record, email_client)
    return ExportResponse(html=result.html, gifUrls=result.gif_urls, success=True)


@router.post("/{signature_id}/export-inline", response_model=InlineExportResponse)
async def export_signature_inline(
    signature_id: str,
    service: SignatureService = Depends(get_signature_service),
    exporter: SignatureExporter = Depends(get_signature_exporter),
):
    """Export a single inline-styled table"""
    record = service.get_record(signature_id)
    result = await asyncio.to_thread(exporter.export_inline, record)
    return InlineExportResponse(
        html=result.html,
        validation=ValidationReport(**result.validation.to_dict()),
        success=True,
        format=result.format,
    )


@router.post("/{signature_id}/export-mjml", response_model=MjmlExportResponse)
async def export_signature_mjml(
    signature_id: str,
    service: SignatureService = Depends(get_signature_service),
    exporter: SignatureExporter = Depends(get_signature_exporter),
):
    """Export through the MJML templates"""
    record = service.get_record(signature_id)
    result = await asyncio.to_thread(exporter.export_mjml, record)
    return MjmlExportResponse(
        html=result.html,
        mjml=result.mjml,
        validation=ValidationReport(**result.validation.to_dict()),
        success=True,
        format=result.format,
    )

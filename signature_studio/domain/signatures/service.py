"""Signature service - Business logic for signature operations"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Signature
from ...storage import get_storage
from ...utils.sanitization import validate_and_sanitize_input
from ..export.orchestrator import SignatureExporter
from ..export.rendering_pool import RenderingSurfacePool
from .repository import SignatureRepository
from .schemas import ElementAnimations, SignatureCreate, SignatureRecord, SignatureUpdate

logger = logging.getLogger(__name__)

# Schema field -> column
FIELD_COLUMNS = {
    "name": "name",
    "templateId": "template_id",
    "personalInfo": "personal_info",
    "images": "images",
    "socialMedia": "social_media",
    "animationType": "animation_type",
    "elementAnimations": "element_animations",
    "elementPositions": "element_positions",
}


def compute_tag(element_animations: Optional[dict]) -> str:
    """dynamic when any element is animated"""
    animations = ElementAnimations(**(element_animations or {}))
    return "dynamic" if animations.active() else "static"


def to_record(signature: Signature) -> SignatureRecord:
    return SignatureRecord(
        id=signature.id,
        ownerId=signature.owner_id,
        name=signature.name,
        templateId=signature.template_id,
        personalInfo=signature.personal_info or {},
        images=signature.images or {},
        socialMedia=signature.social_media or {},
        animationType=signature.animation_type or "none",
        elementAnimations=signature.element_animations or {},
        elementPositions=signature.element_positions or {},
        tag=signature.tag or "static",
        createdAt=signature.created_at,
        updatedAt=signature.updated_at,
    )


@lru_cache
def get_signature_exporter() -> SignatureExporter:
    """Process-wide exporter sharing one rendering surface pool"""
    return SignatureExporter(pool=RenderingSurfacePool(), storage=get_storage())


class SignatureService:
    """Service layer for signature business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SignatureRepository()

    def get_signature(self, signature_id: str) -> Signature:
        signature = self.repo.get(self.db, signature_id)
        if not signature:
            raise HTTPException(status_code=404, detail="Signature not found")
        return signature

    def get_record(self, signature_id: str) -> SignatureRecord:
        return to_record(self.get_signature(signature_id))

    def list_signatures(self, owner_id: str) -> list[SignatureRecord]:
        return [to_record(s) for s in self.repo.list_for_owner(self.db, owner_id)]

    def create_signature(self, data: SignatureCreate) -> SignatureRecord:
        payload = data.model_dump(mode="json")
        values = {FIELD_COLUMNS[key]: payload[key] for key in FIELD_COLUMNS}
        values["name"] = validate_and_sanitize_input(values["name"], max_length=255) or "My Signature"
        values["tag"] = compute_tag(values["element_animations"])

        signature = self.repo.create(self.db, owner_id=data.ownerId, **values)
        logger.info(f"📝 Created signature {signature.id} ({signature.template_id}, {signature.tag})")
        return to_record(signature)

    def update_signature(self, signature_id: str, data: SignatureUpdate) -> SignatureRecord:
        signature = self.get_signature(signature_id)
        payload = data.model_dump(mode="json", exclude_unset=True)
        updates = {}
        for key, value in payload.items():
            column = FIELD_COLUMNS.get(key)
            if column is None:
                continue
            # Nested objects are patched, not replaced
            if isinstance(value, dict):
                value = {**(getattr(signature, column) or {}), **value}
            updates[column] = value
        if updates.get("name"):
            updates["name"] = validate_and_sanitize_input(updates["name"], max_length=255)

        animations = updates.get("element_animations", signature.element_animations)
        updates["tag"] = compute_tag(animations)

        signature = self.repo.update(self.db, signature, **updates)
        logger.info(f"✅ Updated signature {signature.id}")
        return to_record(signature)

    def delete_signature(self, signature_id: str) -> None:
        signature = self.get_signature(signature_id)
        self.repo.delete(self.db, signature)
        logger.info(f"🗑️ Deleted signature {signature_id}")

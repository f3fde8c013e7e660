from fastapi import APIRouter

from ..schemas import TemplateInfo

router = APIRouter(prefix="/templates", tags=["Templates"])

TEMPLATES = [
    TemplateInfo(
        id="professional",
        name="Professional",
        description="Round portrait beside a classic contact block",
    ),
    TemplateInfo(
        id="modern",
        name="Modern",
        description="Dark gradient card with a glowing circular portrait",
    ),
    TemplateInfo(
        id="minimal",
        name="Minimal",
        description="Clean 60/40 split with a gradient-ringed portrait",
    ),
    TemplateInfo(
        id="creative",
        name="Creative",
        description="Classic layout ready for animated elements",
    ),
    TemplateInfo(
        id="sales-professional",
        name="Sales Professional",
        description="Social sidebar, bold name and an angled portrait",
    ),
]


@router.get("", response_model=list[TemplateInfo])
async def list_templates():
    """Fixed catalogue of signature templates"""
    return TEMPLATES

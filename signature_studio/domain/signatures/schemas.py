"""Signature domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

TemplateId = Literal["professional", "modern", "minimal", "creative", "sales-professional"]
LegacyAnimation = Literal["none", "fade-in", "pulse", "cross-dissolve"]
ElementAnimation = Literal[
    "none",
    "fade-in",
    "pulse",
    "cross-dissolve",
    "zoom-in",
    "block-reveal",
    "test-sweep",
    "stick-on",
]

ANIMATED_ELEMENTS = ("headshot", "logo", "socialIcons")
SOCIAL_PLATFORMS = ("linkedin", "twitter", "instagram", "youtube", "tiktok")


class ImageObject(BaseModel):
    """Legacy image shape stored by older clients"""

    url: str


ImageRef = Union[str, ImageObject]


class PersonalInfo(BaseModel):
    name: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None


class SignatureImages(BaseModel):
    """Stored image settings. Sizes are clamped again at render time."""

    headshot: Optional[ImageRef] = None
    logo: Optional[ImageRef] = None
    background: Optional[ImageRef] = None
    headshotSize: int = 100
    logoSize: int = 100
    backgroundOpacity: int = 20


class SignatureImagesInput(SignatureImages):
    """Image settings accepted from clients"""

    headshotSize: int = Field(100, ge=50, le=200)
    logoSize: int = Field(100, ge=50, le=200)
    backgroundOpacity: int = Field(20, ge=0, le=100)


class SocialMedia(BaseModel):
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    youtube: Optional[str] = None
    tiktok: Optional[str] = None


class ElementAnimations(BaseModel):
    headshot: ElementAnimation = "none"
    logo: ElementAnimation = "none"
    socialIcons: ElementAnimation = "none"

    def active(self) -> dict[str, str]:
        """Elements whose animation is something other than none"""
        return {
            element: getattr(self, element)
            for element in ANIMATED_ELEMENTS
            if getattr(self, element) != "none"
        }


class ElementPosition(BaseModel):
    x: float = 0
    y: float = 0
    scale: float = 1


class ElementPositions(BaseModel):
    logo: ElementPosition = Field(default_factory=ElementPosition)
    headshot: ElementPosition = Field(default_factory=ElementPosition)
    name: ElementPosition = Field(default_factory=ElementPosition)
    company: ElementPosition = Field(default_factory=ElementPosition)
    contact: ElementPosition = Field(default_factory=ElementPosition)
    social: ElementPosition = Field(default_factory=ElementPosition)


class SignatureRecord(BaseModel):
    """Read model handed to the export pipeline"""

    id: str
    ownerId: Optional[str] = None
    name: str = "My Signature"
    templateId: str = "professional"
    personalInfo: PersonalInfo = Field(default_factory=PersonalInfo)
    images: SignatureImages = Field(default_factory=SignatureImages)
    socialMedia: SocialMedia = Field(default_factory=SocialMedia)
    animationType: str = "none"
    elementAnimations: ElementAnimations = Field(default_factory=ElementAnimations)
    elementPositions: ElementPositions = Field(default_factory=ElementPositions)
    tag: str = "static"
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @property
    def has_active_animation(self) -> bool:
        return bool(self.elementAnimations.active())

    class Config:
        from_attributes = True


class SignatureCreate(BaseModel):
    """Schema for creating a new signature"""

    ownerId: Optional[str] = None
    name: str = Field("My Signature", max_length=255)
    templateId: TemplateId = "professional"
    personalInfo: PersonalInfo = Field(default_factory=PersonalInfo)
    images: SignatureImagesInput = Field(default_factory=SignatureImagesInput)
    socialMedia: SocialMedia = Field(default_factory=SocialMedia)
    animationType: LegacyAnimation = "none"
    elementAnimations: ElementAnimations = Field(default_factory=ElementAnimations)
    elementPositions: ElementPositions = Field(default_factory=ElementPositions)


class SignatureUpdate(BaseModel):
    """Schema for updating an existing signature"""

    name: Optional[str] = Field(None, max_length=255)
    templateId: Optional[TemplateId] = None
    personalInfo: Optional[PersonalInfo] = None
    images: Optional[SignatureImagesInput] = None
    socialMedia: Optional[SocialMedia] = None
    animationType: Optional[LegacyAnimation] = None
    elementAnimations: Optional[ElementAnimations] = None
    elementPositions: Optional[ElementPositions] = None


class ExportRequest(BaseModel):
    emailClient: Literal["gmail", "outlook", "apple-mail"] = "gmail"


class ValidationReport(BaseModel):
    valid: bool
    issues: list[str]


class ExportResponse(BaseModel):
    html: str
    gifUrls: dict[str, str]
    success: bool = True


class InlineExportResponse(BaseModel):
    html: str
    validation: ValidationReport
    success: bool = True
    format: str = "inline-table"


class MjmlExportResponse(BaseModel):
    html: str
    mjml: str
    validation: ValidationReport
    success: bool = True
    format: str = "mjml"

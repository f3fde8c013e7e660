from typing import Optional

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    stage: Optional[str] = None
    detail: str


class UploadResponse(BaseModel):
    url: str
    key: str
    path: Optional[str] = None


class TemplateInfo(BaseModel):
    id: str
    name: str
    description: str

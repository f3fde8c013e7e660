import uuid

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.sql import func

from .database import Base


def generate_public_id():
    """Generate a unique id for a signature"""
    return str(uuid.uuid4())


class Signature(Base):
    __tablename__ = "signatures"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    owner_id = Column(String(255), index=True, nullable=True)  # Null for anonymous drafts
    name = Column(String(255), nullable=False, default="My Signature")
    template_id = Column(String(50), nullable=False, default="professional")
    personal_info = Column(JSON, nullable=False, default=dict)
    images = Column(JSON, nullable=False, default=dict)
    social_media = Column(JSON, nullable=False, default=dict)
    animation_type = Column(String(50), nullable=False, default="none")
    element_animations = Column(JSON, nullable=False, default=dict)
    element_positions = Column(JSON, nullable=False, default=dict)
    # Cached hint only - exports recompute it from element_animations
    tag = Column(String(20), nullable=False, default="static")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

"""Signature repository - Database operations for signatures"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Signature


class SignatureRepository:
    """Repository for signature database operations"""

    @staticmethod
    def get(db: Session, signature_id: str) -> Optional[Signature]:
        return db.query(Signature).filter(Signature.id == signature_id).first()

    @staticmethod
    def list_for_owner(db: Session, owner_id: str) -> list[Signature]:
        """Get all signatures for an owner, newest first"""
        return (
            db.query(Signature)
            .filter(Signature.owner_id == owner_id)
            .order_by(Signature.created_at.desc())
            .all()
        )

    @staticmethod
    def create(db: Session, **signature_data) -> Signature:
        signature = Signature(**signature_data)
        db.add(signature)
        db.commit()
        db.refresh(signature)
        return signature

    @staticmethod
    def update(db: Session, signature: Signature, **updates) -> Signature:
        """Update a signature with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(signature, key):
                setattr(signature, key, value)

        db.commit()
        db.refresh(signature)
        return signature

    @staticmethod
    def delete(db: Session, signature: Signature) -> None:
        db.delete(signature)
        db.commit()

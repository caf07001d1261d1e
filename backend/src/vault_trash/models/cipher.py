"""Cipher SQLAlchemy model

A cipher is one encrypted vault item (login, card, identity, secure note).
Deleting a cipher from the client moves it to the trash by setting
deleted_at; the row stays until the trash purge removes it.
"""

from sqlalchemy import Column, Text, Integer, Boolean, Index

from .base import Base


class Cipher(Base):
    """Vault item row.

    Timestamps are stored as text in the form YYYY-MM-DDTHH:MM:SS.sssZ (UTC),
    so ordering them as strings is the same as ordering them in time.
    deleted_at is NULL for active ciphers.
    """
    __tablename__ = "ciphers"
    __table_args__ = (
        Index("ix_ciphers_user_id", "user_id"),
        Index("ix_ciphers_deleted_at", "deleted_at"),
    )

    id = Column(Text, primary_key=True)
    user_id = Column(Text, nullable=True)
    organization_id = Column(Text, nullable=True)
    type = Column(Integer, nullable=False)
    data = Column(Text, nullable=False)  # encrypted JSON blob
    favorite = Column(Boolean, nullable=False, default=False)
    folder_id = Column(Text, nullable=True)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
    deleted_at = Column(Text, nullable=True)

    @property
    def is_deleted(self) -> bool:
        """Whether the cipher is in the trash."""
        return self.deleted_at is not None

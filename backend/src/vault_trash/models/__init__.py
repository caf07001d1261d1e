"""SQLAlchemy models for the vault tables touched by the trash purge."""

from .base import Base
from .cipher import Cipher

__all__ = [
    "Base",
    "Cipher",
]

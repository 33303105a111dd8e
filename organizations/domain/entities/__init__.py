"""
Organization Domain Entities

Each entity in its own file.
"""

from .enums import AcceptanceStatus, CallbackEvent, InvitationStatus
from .user import User
from .organization import Organization
from .membership import Membership
from .invitation import Invitation, normalize_email

__all__ = [
    # Enums
    "AcceptanceStatus",
    "CallbackEvent",
    "InvitationStatus",
    # Entities
    "User",
    "Organization",
    "Membership",
    "Invitation",
    # Helpers
    "normalize_email",
]

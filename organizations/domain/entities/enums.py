"""
Organization Domain Enums

Enumeration types used across domain entities. Roles are deliberately not
an enum: they live in the extensible RoleHierarchy registry.
"""

from enum import Enum


class InvitationStatus(str, Enum):
    """Derived invitation status (never persisted)"""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"


class AcceptanceStatus(str, Enum):
    """Outcome of a successful invitation acceptance"""

    accepted = "accepted"
    already_member = "already_member"


class CallbackEvent(str, Enum):
    """Events dispatched to registered callback handlers"""

    organization_created = "organization_created"
    member_invited = "member_invited"
    member_joined = "member_joined"
    member_removed = "member_removed"
    role_changed = "role_changed"
    ownership_transferred = "ownership_transferred"

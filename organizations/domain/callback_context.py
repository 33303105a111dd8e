"""
Callback Context

Immutable event payload handed to callback handlers. Each event populates
only the fields that apply to it:

- organization_created: organization, user
- member_invited: organization, invitation, invited_by
- member_joined: organization, membership, user, invitation
- member_removed: organization, membership, user, removed_by
- role_changed: organization, membership, user, old_role, new_role, changed_by
- ownership_transferred: organization, old_owner, new_owner
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from .entities import CallbackEvent, Invitation, Membership, Organization, User


class CallbackContext(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    event: CallbackEvent
    organization: Optional[Organization] = None
    user: Optional[User] = None
    membership: Optional[Membership] = None
    invitation: Optional[Invitation] = None
    invited_by: Optional[User] = None
    removed_by: Optional[User] = None
    changed_by: Optional[User] = None
    old_role: Optional[str] = None
    new_role: Optional[str] = None
    old_owner: Optional[User] = None
    new_owner: Optional[User] = None
    permission: Optional[str] = None
    required_role: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Populated fields only; absent fields are omitted, not None"""
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }

    def is_event(self, event: str) -> bool:
        return self.event == event

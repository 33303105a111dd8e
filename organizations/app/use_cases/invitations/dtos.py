"""
Invitation Use Case DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel, ConfigDict

from organizations.domain.entities import AcceptanceStatus, Invitation, Membership


class InvitationAcceptance(BaseModel):
    """Result of accepting an invitation"""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: AcceptanceStatus
    invitation: Invitation
    membership: Membership

    @property
    def accepted(self) -> bool:
        return self.status == AcceptanceStatus.accepted

    @property
    def already_member(self) -> bool:
        return self.status == AcceptanceStatus.already_member

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from organizations.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(
        self, invitation_id: UUID, for_update: bool = False
    ) -> Optional[Invitation]:
        """Get invitation by ID, optionally locking the row"""
        pass

    @abstractmethod
    async def get_by_token(
        self, token: str, for_update: bool = False
    ) -> Optional[Invitation]:
        """Get invitation by token, optionally locking the row"""
        pass

    @abstractmethod
    async def token_exists(self, token: str) -> bool:
        """Check whether a token is already in use"""
        pass

    @abstractmethod
    async def get_open_by_organization_and_email(
        self, organization_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get the non-accepted (pending or expired) invitation for an email"""
        pass

    @abstractmethod
    async def get_pending_by_organization_id(
        self, organization_id: UUID, now: datetime
    ) -> List[Invitation]:
        """Get invitations that are neither accepted nor expired"""
        pass

    @abstractmethod
    async def get_pending_by_email(self, email: str, now: datetime) -> List[Invitation]:
        """Get pending invitations addressed to an email across organizations"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass

    @abstractmethod
    async def delete(self, invitation: Invitation) -> None:
        """Delete an invitation"""
        pass

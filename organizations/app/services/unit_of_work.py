from abc import ABC, abstractmethod

from organizations.app.repositories.invitation_repository import IInvitationRepository
from organizations.app.repositories.membership_repository import IMembershipRepository
from organizations.app.repositories.organization_repository import IOrganizationRepository
from organizations.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    organizations: IOrganizationRepository
    memberships: IMembershipRepository
    invitations: IInvitationRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

"""
Add Member Use Case

Direct membership grant, bypassing invitations.
"""

import logging
from typing import Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import Membership
from organizations.domain.errors import OwnerConflict
from organizations.domain.roles import MEMBER, OWNER

from ..base import OrganizationUseCase

logger = logging.getLogger(__name__)


class AddMemberUseCase(OrganizationUseCase):
    """
    Use case for adding a user to an organization.

    Business Rules:
    - Role must be a registered role
    - Actor needs invite_members
    - role=owner fails while the organization already has an owner
    - Idempotent: an existing membership is returned as is, its role is
      NOT updated to the requested one
    - No callback is dispatched
    """

    async def execute(
        self,
        organization_id: UUID,
        user_id: UUID,
        role: str = MEMBER,
        actor_id: Optional[UUID] = None,
    ) -> Membership:
        """
        Execute add member use case.

        Args:
            organization_id: Target organization
            user_id: User to add
            role: Role for a new membership
            actor_id: User performing the action

        Returns:
            The new or already existing Membership
        """
        actor_id = require_actor(actor_id)
        role = self.roles.validate(role)
        return await self._run(self._add, organization_id, user_id, role, actor_id)

    async def _add(
        self, organization_id: UUID, user_id: UUID, role: str, actor_id: UUID
    ) -> Membership:
        organization = await self._get_organization(organization_id)
        await self.authorization.authorize(organization.id, actor_id, "invite_members")

        if role == OWNER and await self.uow.memberships.get_owner(organization.id):
            raise OwnerConflict()

        await self._get_user(user_id)

        existing = await self.uow.memberships.get_by_user_and_organization(
            user_id, organization.id
        )
        if existing is not None:
            return existing

        now = self.clock.now()
        membership = await self.uow.memberships.create(
            Membership(
                organization_id=organization.id,
                user_id=user_id,
                role=role,
                invited_by_id=actor_id,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            f"User {user_id} added to organization {organization.id} as {role} by {actor_id}"
        )
        return membership

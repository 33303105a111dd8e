"""
Remove Member Use Case

Deletes a membership. Also the "leave organization" path when the actor
removes themselves.
"""

import logging
from typing import Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import CallbackEvent, Membership
from organizations.domain.errors import CannotRemoveOwner

from ..base import OrganizationUseCase

logger = logging.getLogger(__name__)


class RemoveMemberUseCase(OrganizationUseCase):
    """
    Use case for removing members from an organization.

    Business Rules:
    - Actor needs remove_members, unless removing themselves
    - Removing a non-member is a no-op returning None
    - The owner cannot be removed; ownership must be transferred first
    - Dispatches member_removed
    """

    async def execute(
        self, organization_id: UUID, user_id: UUID, actor_id: Optional[UUID]
    ) -> Optional[Membership]:
        """
        Execute remove member use case.

        Returns:
            The deleted Membership, or None when the user was not a member
        """
        actor_id = require_actor(actor_id)
        return await self._run(self._remove, organization_id, user_id, actor_id)

    async def _remove(
        self, organization_id: UUID, user_id: UUID, actor_id: UUID
    ) -> Optional[Membership]:
        organization = await self._get_organization(organization_id)
        if user_id != actor_id:
            await self.authorization.authorize(
                organization.id, actor_id, "remove_members"
            )

        membership = await self.uow.memberships.get_by_user_and_organization(
            user_id, organization.id
        )
        if membership is None:
            return None

        if membership.is_owner:
            raise CannotRemoveOwner()

        user = await self.uow.users.get_by_id(user_id)
        removed_by = await self.uow.users.get_by_id(actor_id)
        await self.uow.memberships.delete(membership)

        self._emit(
            CallbackEvent.member_removed,
            organization=organization,
            membership=membership,
            user=user,
            removed_by=removed_by,
        )
        logger.info(
            f"User {user_id} removed from organization {organization.id} by {actor_id}"
        )
        return membership

"""
Change Role Use Case

Handles changing a member's role. The owner role is never reachable from
here: see TransferOwnershipUseCase.
"""

import logging
from typing import Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import CallbackEvent, Membership
from organizations.domain.errors import (
    CannotDemoteOwner,
    MembershipNotFound,
    NotAuthorized,
    OwnerConflict,
)
from organizations.domain.roles import OWNER

from ..base import OrganizationUseCase

logger = logging.getLogger(__name__)

PERMISSION = "edit_member_roles"


class ChangeRoleUseCase(OrganizationUseCase):
    """
    Use case for changing a member's role.

    Business Rules:
    - Actor needs edit_member_roles and cannot change their own role
    - Target must be a member (MembershipNotFound)
    - New role must be registered and cannot be owner (OwnerConflict)
    - The owner cannot be demoted (CannotDemoteOwner)
    - Same role is a no-op: no write, no event
    - Dispatches role_changed with old and new role
    """

    async def execute(
        self,
        organization_id: UUID,
        user_id: UUID,
        to: str,
        actor_id: Optional[UUID],
    ) -> Membership:
        actor_id = require_actor(actor_id)
        return await self._run(self._change, organization_id, user_id, to, actor_id)

    async def _change(
        self, organization_id: UUID, user_id: UUID, to: str, actor_id: UUID
    ) -> Membership:
        organization = await self._get_organization(organization_id)
        await self.authorization.authorize(organization.id, actor_id, PERMISSION)

        if user_id == actor_id:
            raise NotAuthorized("You cannot change your own role", permission=PERMISSION)

        membership = await self.uow.memberships.get_by_user_and_organization(
            user_id, organization.id
        )
        if membership is None:
            raise MembershipNotFound()

        new_role = self.roles.validate(to)
        if new_role == OWNER:
            raise OwnerConflict(
                "Cannot assign the owner role. Use ownership transfer instead."
            )
        if membership.is_owner:
            raise CannotDemoteOwner()

        old_role = membership.role
        if old_role == new_role:
            return membership

        membership.role = new_role
        membership.updated_at = self.clock.now()
        membership = await self.uow.memberships.update(membership)

        user = await self.uow.users.get_by_id(user_id)
        changed_by = await self.uow.users.get_by_id(actor_id)
        self._emit(
            CallbackEvent.role_changed,
            organization=organization,
            membership=membership,
            user=user,
            old_role=old_role,
            new_role=new_role,
            changed_by=changed_by,
        )
        logger.info(
            f"Role of {user_id} in organization {organization.id} changed "
            f"{old_role} -> {new_role} by {actor_id}"
        )
        return membership

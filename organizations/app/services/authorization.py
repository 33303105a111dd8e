"""
Authorization

Membership and capability gates every use case runs before mutating.
"""

import logging
from typing import Optional
from uuid import UUID

from organizations.app.services.unit_of_work import UnitOfWork
from organizations.domain.entities import Membership
from organizations.domain.errors import MissingActor, NotAMember, NotAuthorized
from organizations.domain.roles import RoleHierarchy

logger = logging.getLogger(__name__)


def require_actor(actor_id: Optional[UUID]) -> UUID:
    if actor_id is None:
        raise MissingActor()
    return actor_id


class Authorization:
    def __init__(self, uow: UnitOfWork, roles: RoleHierarchy):
        self.uow = uow
        self.roles = roles

    async def require_membership(
        self, organization_id: UUID, user_id: UUID
    ) -> Membership:
        membership = await self.uow.memberships.get_by_user_and_organization(
            user_id, organization_id
        )
        if membership is None:
            raise NotAMember("You are not a member of this organization")
        return membership

    def require_permission(self, membership: Membership, permission: str) -> None:
        if not self.roles.has_permission(membership.role, permission):
            logger.warning(
                f"Denied {permission} to user {membership.user_id} "
                f"in organization {membership.organization_id}"
            )
            raise NotAuthorized(
                f"Your role does not allow {permission}",
                permission=permission,
                required_role=self.roles.lowest_role_with(permission),
            )

    async def authorize(
        self, organization_id: UUID, actor_id: UUID, permission: str
    ) -> Membership:
        """Actor's membership, once it is known to hold ``permission``"""
        membership = await self.require_membership(organization_id, actor_id)
        self.require_permission(membership, permission)
        return membership

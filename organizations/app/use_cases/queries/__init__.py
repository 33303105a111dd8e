"""
Query Use Cases

Read-only views: a user's organizations and invitations, an organization's
members and pending invitations.
"""

from .get_organization_use_case import GetOrganizationUseCase
from .list_invitations_use_case import (
    ListPendingInvitationsUseCase,
    ListUserInvitationsUseCase,
)
from .list_members_use_case import ListMembersUseCase
from .list_organizations_use_case import ListUserOrganizationsUseCase

__all__ = [
    "GetOrganizationUseCase",
    "ListUserOrganizationsUseCase",
    "ListMembersUseCase",
    "ListPendingInvitationsUseCase",
    "ListUserInvitationsUseCase",
]

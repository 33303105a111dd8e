"""
A concurrent writer commits between our existence check and our insert:
SQLite rejects the insert at flush, the use case rolls back and re-runs,
and the second attempt returns the row the other writer committed.
"""

import logging
from datetime import timedelta

import pytest
import pytest_asyncio

from organizations.adapter.repositories.membership_repository import MembershipRepository
from organizations.app.use_cases.organizations import (
    AddMemberUseCase,
    CreateOrganizationUseCase,
    SendInvitationUseCase,
)
from organizations.domain.entities import Invitation, Membership
from organizations.domain.entities.invitation import OPEN_INVITATION_INDEX
from organizations.domain.entities.membership import MEMBERSHIP_USER_INDEX
from tests.fixtures.factories import NOW


@pytest_asyncio.fixture
async def acme(run, create_user):
    alice = await create_user("alice@acme.io")
    organization = await run(CreateOrganizationUseCase).execute("Acme Corp", alice.id)
    return organization, alice


def commit_first(new_uow, entity_factory):
    """Coroutine that commits one row on its own session, once"""
    committed = []

    async def write():
        if committed:
            return
        committed.append(entity_factory())
        async with new_uow() as uow:
            uow.session.add(committed[0])
            await uow.commit()

    return write


@pytest.mark.asyncio
async def test_send_invitation_returns_the_winners_invitation(
    acme, run, new_uow, fetch, caplog
):
    organization, alice = acme
    competing_write = commit_first(
        new_uow,
        lambda: Invitation(
            organization_id=organization.id,
            invited_by_id=alice.id,
            email="dave@x.com",
            role="viewer",
            token="winner-token",
            expires_at=NOW + timedelta(days=7),
        ),
    )
    use_case = run(SendInvitationUseCase)
    issue = use_case.token_issuer.issue

    async def issue_after_competitor(is_taken):
        await competing_write()
        return await issue(is_taken)

    use_case.token_issuer.issue = issue_after_competitor

    with caplog.at_level(logging.WARNING):
        invitation = await use_case.execute(organization.id, "dave@x.com", actor_id=alice.id)

    assert invitation.token == "winner-token"
    assert invitation.role == "viewer"
    assert f"lost a race on {OPEN_INVITATION_INDEX}" in caplog.text
    pending = await fetch(
        lambda uow: uow.invitations.get_pending_by_organization_id(organization.id, NOW)
    )
    assert [i.token for i in pending] == ["winner-token"]


@pytest.mark.asyncio
async def test_add_member_returns_the_winners_membership(
    acme, run, new_uow, create_user, fetch, monkeypatch, caplog
):
    organization, alice = acme
    bob = await create_user("bob@x.com")
    competing_write = commit_first(
        new_uow,
        lambda: Membership(organization_id=organization.id, user_id=bob.id, role="admin"),
    )
    create = MembershipRepository.create

    async def create_after_competitor(self, membership):
        await competing_write()
        return await create(self, membership)

    monkeypatch.setattr(MembershipRepository, "create", create_after_competitor)

    with caplog.at_level(logging.WARNING):
        membership = await run(AddMemberUseCase).execute(
            organization.id, bob.id, role="viewer", actor_id=alice.id
        )

    assert membership.user_id == bob.id
    assert membership.role == "admin"
    assert f"lost a race on {MEMBERSHIP_USER_INDEX}" in caplog.text
    memberships = await fetch(
        lambda uow: uow.memberships.get_by_organization_id(organization.id)
    )
    assert sorted(m.role for m in memberships) == ["admin", "owner"]

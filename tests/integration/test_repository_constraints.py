"""
Store-level invariants: unique indexes surface as UniqueViolation with the
index name, and deletes clean up dependent rows.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
import pytest_asyncio

from organizations.adapter.repositories.user_repository import EMAIL_INDEX
from organizations.app.use_cases.organizations import (
    AddMemberUseCase,
    CreateOrganizationUseCase,
    DeleteOrganizationUseCase,
    SendInvitationUseCase,
)
from organizations.domain.entities import Invitation, Membership, Organization, User
from organizations.domain.entities.invitation import OPEN_INVITATION_INDEX, TOKEN_INDEX
from organizations.domain.entities.membership import (
    MEMBERSHIP_USER_INDEX,
    SINGLE_OWNER_INDEX,
)
from organizations.domain.entities.organization import SLUG_INDEX
from organizations.domain.errors import UniqueViolation
from tests.fixtures.factories import NOW


@pytest_asyncio.fixture
async def seeded(run, create_user):
    alice = await create_user("alice@acme.io")
    bob = await create_user("bob@x.com")
    organization = await run(CreateOrganizationUseCase).execute("Acme Corp", alice.id)
    await run(AddMemberUseCase).execute(organization.id, bob.id, role="admin", actor_id=alice.id)
    return organization, alice, bob


def invitation_for(organization, email, token):
    return Invitation(
        organization_id=organization.id,
        email=email,
        role="member",
        token=token,
        expires_at=NOW + timedelta(days=7),
    )


async def violation(new_uow, write):
    async with new_uow() as uow:
        with pytest.raises(UniqueViolation) as exc_info:
            await write(uow)
    return exc_info.value.constraint


@pytest.mark.asyncio
async def test_duplicate_email(new_uow, create_user):
    await create_user("carol@x.com")

    constraint = await violation(new_uow, lambda uow: uow.users.create(User(email="carol@x.com")))

    assert constraint == EMAIL_INDEX


@pytest.mark.asyncio
async def test_duplicate_slug(new_uow, seeded):
    constraint = await violation(
        new_uow,
        lambda uow: uow.organizations.create(Organization(name="Acme", slug="ACME-CORP")),
    )

    assert constraint == SLUG_INDEX


@pytest.mark.asyncio
async def test_duplicate_membership(new_uow, seeded):
    organization, _, bob = seeded

    constraint = await violation(
        new_uow,
        lambda uow: uow.memberships.create(
            Membership(organization_id=organization.id, user_id=bob.id, role="member")
        ),
    )

    assert constraint == MEMBERSHIP_USER_INDEX


@pytest.mark.asyncio
async def test_second_owner(new_uow, seeded, create_user):
    organization, _, _ = seeded
    carol = await create_user("carol@x.com")

    constraint = await violation(
        new_uow,
        lambda uow: uow.memberships.create(
            Membership(organization_id=organization.id, user_id=carol.id, role="owner")
        ),
    )

    assert constraint == SINGLE_OWNER_INDEX


@pytest.mark.asyncio
async def test_duplicate_token(new_uow, seeded):
    organization, _, _ = seeded
    async with new_uow() as uow:
        await uow.invitations.create(invitation_for(organization, "dave@x.com", "same"))
        await uow.commit()

    constraint = await violation(
        new_uow,
        lambda uow: uow.invitations.create(invitation_for(organization, "erin@x.com", "same")),
    )

    assert constraint == TOKEN_INDEX


@pytest.mark.asyncio
async def test_second_open_invitation_for_email(new_uow, seeded):
    organization, _, _ = seeded
    async with new_uow() as uow:
        await uow.invitations.create(invitation_for(organization, "dave@x.com", "first"))
        await uow.commit()

    constraint = await violation(
        new_uow,
        lambda uow: uow.invitations.create(invitation_for(organization, "DAVE@x.com", "second")),
    )

    assert constraint == OPEN_INVITATION_INDEX


@pytest.mark.asyncio
async def test_accepted_invitation_does_not_block_a_new_one(new_uow, seeded, fetch):
    organization, _, _ = seeded
    accepted = invitation_for(organization, "dave@x.com", "first")
    accepted.accepted_at = NOW
    async with new_uow() as uow:
        await uow.invitations.create(accepted)
        await uow.invitations.create(invitation_for(organization, "dave@x.com", "second"))
        await uow.commit()

    pending = await fetch(lambda uow: uow.invitations.get_pending_by_email("dave@x.com", NOW))
    assert [i.token for i in pending] == ["second"]


@pytest.mark.asyncio
async def test_delete_organization_removes_memberships_and_invitations(
    run, new_uow, seeded, fetch
):
    organization, alice, bob = seeded
    await run(SendInvitationUseCase).execute(organization.id, "dave@x.com", actor_id=bob.id)

    await run(DeleteOrganizationUseCase).execute(organization.id, actor_id=alice.id)

    assert await fetch(lambda uow: uow.organizations.get_by_id(organization.id)) is None
    assert await fetch(lambda uow: uow.memberships.get_by_organization_id(organization.id)) == []
    assert await fetch(lambda uow: uow.invitations.get_pending_by_email("dave@x.com", NOW)) == []
    assert await fetch(lambda uow: uow.organizations.get_by_member(alice.id)) == []


@pytest.mark.asyncio
async def test_deleting_inviter_keeps_their_invitees(run, new_uow, seeded, create_user, fetch):
    organization, alice, bob = seeded
    carol = await create_user("carol@x.com")
    await run(AddMemberUseCase).execute(organization.id, carol.id, actor_id=bob.id)
    invitation = await run(SendInvitationUseCase).execute(
        organization.id, "dave@x.com", actor_id=bob.id
    )

    async with new_uow() as uow:
        await uow.users.delete(await uow.users.get_by_id(bob.id))
        await uow.commit()

    carol_membership = await fetch(
        lambda uow: uow.memberships.get_by_user_and_organization(carol.id, organization.id)
    )
    assert carol_membership is not None
    assert carol_membership.invited_by_id is None

    stored = await fetch(lambda uow: uow.invitations.get_by_id(invitation.id))
    assert stored.invited_by_id is None
    assert await fetch(
        lambda uow: uow.memberships.get_by_user_and_organization(bob.id, organization.id)
    ) is None


@pytest.mark.asyncio
async def test_lookups_are_case_insensitive(seeded, fetch):
    organization, alice, _ = seeded

    assert (await fetch(lambda uow: uow.users.get_by_email(" ALICE@Acme.io "))).id == alice.id
    assert (await fetch(lambda uow: uow.organizations.get_by_slug("Acme-Corp"))).id == organization.id
    assert await fetch(lambda uow: uow.memberships.get_member_by_email(organization.id, "BOB@x.com"))
    assert await fetch(lambda uow: uow.memberships.get_member_by_email(uuid4(), "bob@x.com")) is None


@pytest.mark.asyncio
async def test_naive_utc_timestamps_round_trip(new_uow, seeded, fetch, clock):
    organization, alice, bob = seeded

    stored_user = await fetch(lambda uow: uow.users.get_by_id(alice.id))
    stored_organization = await fetch(lambda uow: uow.organizations.get_by_id(organization.id))
    stored_membership = await fetch(
        lambda uow: uow.memberships.get_by_user_and_organization(bob.id, organization.id)
    )

    assert stored_user.created_at.tzinfo is None
    assert stored_organization.created_at == clock.now()
    assert stored_organization.updated_at.tzinfo is None
    assert stored_membership.created_at == clock.now()

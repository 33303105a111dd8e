from datetime import timedelta

import pytest

from organizations.app.use_cases.invitations import AcceptInvitationUseCase
from organizations.domain.entities import AcceptanceStatus, CallbackEvent
from organizations.domain.errors import (
    CannotAcceptAsOwner,
    EmailMismatch,
    InvitationAlreadyAccepted,
    InvitationExpired,
    InvitationNotFound,
    MissingActor,
    UserNotFound,
)
from tests.fixtures.factories import (
    NOW,
    make_invitation,
    make_membership,
    make_organization,
    make_user,
)


@pytest.fixture
def organization(mock_uow):
    organization = make_organization()
    mock_uow.organizations.get_by_id.return_value = organization
    return organization


@pytest.fixture
def inviter():
    return make_user("alice@acme.io")


@pytest.fixture
def bob(mock_uow):
    user = make_user("Bob@X.com")
    mock_uow.users.get_by_id.return_value = user
    return user


@pytest.fixture
def invitation(mock_uow, organization, inviter):
    invitation = make_invitation(organization, email="bob@x.com", role="admin", invited_by=inviter)
    mock_uow.invitations.get_by_token.return_value = invitation
    return invitation


@pytest.fixture
def use_case(mock_uow, clock, dispatcher):
    return AcceptInvitationUseCase(mock_uow, clock=clock, callbacks=dispatcher)


@pytest.mark.asyncio
async def test_accept_creates_membership(mock_uow, organization, inviter, bob, invitation, use_case, recorded):
    result = await use_case.execute(invitation.token, bob.id)

    assert result.status == AcceptanceStatus.accepted
    assert result.accepted
    assert result.membership.role == "admin"
    assert result.membership.user_id == bob.id
    assert result.membership.invited_by_id == inviter.id
    assert result.invitation.accepted_at == NOW
    mock_uow.invitations.get_by_token.assert_any_await(invitation.token, for_update=True)
    mock_uow.commit.assert_awaited_once()

    context = recorded[0]
    assert context.event == CallbackEvent.member_joined
    assert context.user is bob
    assert context.membership is result.membership
    assert context.organization is organization


@pytest.mark.asyncio
async def test_email_mismatch(mock_uow, organization, invitation, use_case):
    eve = make_user("eve@x.com")
    mock_uow.users.get_by_id.return_value = eve

    with pytest.raises(EmailMismatch):
        await use_case.execute(invitation.token, eve.id)
    mock_uow.memberships.create.assert_not_called()


@pytest.mark.asyncio
async def test_skip_email_validation(mock_uow, organization, invitation, use_case):
    eve = make_user("eve@x.com")
    mock_uow.users.get_by_id.return_value = eve

    result = await use_case.execute(invitation.token, eve.id, skip_email_validation=True)

    assert result.membership.user_id == eve.id


@pytest.mark.asyncio
async def test_expired(mock_uow, bob, invitation, use_case):
    invitation.expires_at = NOW - timedelta(hours=1)

    with pytest.raises(InvitationExpired):
        await use_case.execute(invitation.token, bob.id)
    assert invitation.accepted_at is None


@pytest.mark.asyncio
async def test_owner_role_cannot_be_accepted(mock_uow, bob, invitation, use_case):
    invitation.role = "owner"

    with pytest.raises(CannotAcceptAsOwner):
        await use_case.execute(invitation.token, bob.id)


@pytest.mark.asyncio
async def test_already_member_marks_invitation_accepted(
    mock_uow, organization, bob, invitation, use_case, recorded
):
    existing = make_membership(organization, bob, "viewer")
    mock_uow.memberships.get_by_user_and_organization.return_value = existing

    result = await use_case.execute(invitation.token, bob.id)

    assert result.status == AcceptanceStatus.already_member
    assert result.membership is existing
    assert result.membership.role == "viewer"
    assert invitation.accepted_at == NOW
    mock_uow.invitations.update.assert_awaited_once()
    mock_uow.memberships.create.assert_not_called()
    assert recorded == []


@pytest.mark.asyncio
async def test_accepted_invitation_returns_existing_membership(
    mock_uow, organization, bob, invitation, use_case
):
    invitation.accepted_at = NOW - timedelta(days=1)
    existing = make_membership(organization, bob, "admin")
    mock_uow.memberships.get_by_user_and_organization.return_value = existing

    result = await use_case.execute(invitation.token, bob.id)

    assert result.already_member
    assert result.membership is existing
    mock_uow.invitations.update.assert_not_called()


@pytest.mark.asyncio
async def test_accepted_invitation_does_not_regrant_removed_membership(
    mock_uow, bob, invitation, use_case
):
    invitation.accepted_at = NOW - timedelta(days=1)
    # Accepted long ago, even past expiry: still "accepted", never "expired"
    invitation.expires_at = NOW - timedelta(hours=1)

    with pytest.raises(InvitationAlreadyAccepted):
        await use_case.execute(invitation.token, bob.id)
    mock_uow.memberships.create.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_token(mock_uow, bob, use_case):
    mock_uow.invitations.get_by_token.return_value = None

    with pytest.raises(InvitationNotFound):
        await use_case.execute("nope", bob.id)


@pytest.mark.asyncio
async def test_unknown_user(mock_uow, invitation, use_case):
    mock_uow.users.get_by_id.return_value = None

    with pytest.raises(UserNotFound):
        await use_case.execute(invitation.token, make_user().id)


@pytest.mark.asyncio
async def test_missing_user(mock_uow, invitation, use_case):
    with pytest.raises(MissingActor):
        await use_case.execute(invitation.token, None)

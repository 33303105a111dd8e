import pytest

from organizations.app.services.settings import OrganizationSettings
from organizations.app.use_cases.organizations import CreateOrganizationUseCase
from organizations.domain.entities import CallbackEvent
from organizations.domain.errors import (
    InvalidOrganizationName,
    MissingActor,
    OrganizationLimitReached,
    UserNotFound,
)
from tests.fixtures.factories import NOW, make_user


@pytest.fixture
def actor(mock_uow):
    user = make_user("alice@acme.io")
    mock_uow.users.get_by_id.return_value = user
    return user


@pytest.mark.asyncio
async def test_creates_organization_with_actor_as_owner(mock_uow, clock, dispatcher, recorded, actor):
    use_case = CreateOrganizationUseCase(mock_uow, clock=clock, callbacks=dispatcher)

    organization = await use_case.execute("  Acme Corp ", actor_id=actor.id)

    assert organization.name == "Acme Corp"
    assert organization.slug == "acme-corp"
    assert organization.created_at == NOW

    membership = mock_uow.memberships.create.call_args.args[0]
    assert membership.organization_id == organization.id
    assert membership.user_id == actor.id
    assert membership.role == "owner"

    mock_uow.commit.assert_awaited_once()
    assert [ctx.event for ctx in recorded] == [CallbackEvent.organization_created]
    assert recorded[0].organization is organization
    assert recorded[0].user is actor


@pytest.mark.asyncio
async def test_taken_slug_gets_suffix(mock_uow, actor):
    mock_uow.organizations.slug_exists.side_effect = [True, False]

    organization = await CreateOrganizationUseCase(mock_uow).execute("Acme Corp", actor.id)

    assert organization.slug.startswith("acme-corp-")


@pytest.mark.asyncio
async def test_organization_limit(mock_uow, dispatcher, recorded, actor):
    mock_uow.organizations.count_owned_by.return_value = 2
    use_case = CreateOrganizationUseCase(
        mock_uow,
        callbacks=dispatcher,
        settings=OrganizationSettings(max_organizations_per_user=2),
    )

    with pytest.raises(OrganizationLimitReached):
        await use_case.execute("Acme Corp", actor.id)

    mock_uow.organizations.create.assert_not_called()
    mock_uow.commit.assert_not_called()
    assert recorded == []


@pytest.mark.asyncio
async def test_missing_actor(mock_uow):
    with pytest.raises(MissingActor):
        await CreateOrganizationUseCase(mock_uow).execute("Acme Corp", None)
    mock_uow.__aenter__.assert_not_called()


@pytest.mark.asyncio
async def test_blank_name(mock_uow, actor):
    with pytest.raises(InvalidOrganizationName):
        await CreateOrganizationUseCase(mock_uow).execute("   ", actor.id)


@pytest.mark.asyncio
async def test_unknown_actor(mock_uow):
    mock_uow.users.get_by_id.return_value = None

    with pytest.raises(UserNotFound):
        await CreateOrganizationUseCase(mock_uow).execute("Acme Corp", make_user().id)

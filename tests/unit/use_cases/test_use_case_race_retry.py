"""
Race handling shared by every use case: a UniqueViolation at commit rolls
the attempt back and re-runs the operation from scratch.
"""

import pytest

from organizations.app.use_cases.organizations import CreateOrganizationUseCase
from organizations.domain.entities.organization import SLUG_INDEX
from organizations.domain.errors import UniqueViolation
from tests.fixtures.factories import make_user


@pytest.fixture
def actor(mock_uow):
    user = make_user("alice@acme.io")
    mock_uow.users.get_by_id.return_value = user
    return user


@pytest.mark.asyncio
async def test_lost_race_is_retried_and_events_fire_once(mock_uow, actor, dispatcher, recorded):
    mock_uow.commit.side_effect = [UniqueViolation(SLUG_INDEX), None]

    organization = await CreateOrganizationUseCase(mock_uow, callbacks=dispatcher).execute(
        "Acme Corp", actor.id
    )

    assert mock_uow.commit.await_count == 2
    assert mock_uow.__aenter__.await_count == 2
    assert mock_uow.organizations.create.await_count == 2
    assert len(recorded) == 1
    assert recorded[0].organization is organization


@pytest.mark.asyncio
async def test_gives_up_after_max_attempts(mock_uow, actor, dispatcher, recorded):
    mock_uow.commit.side_effect = UniqueViolation(SLUG_INDEX)

    with pytest.raises(UniqueViolation) as exc_info:
        await CreateOrganizationUseCase(mock_uow, callbacks=dispatcher).execute(
            "Acme Corp", actor.id
        )

    assert exc_info.value.constraint == SLUG_INDEX
    assert mock_uow.commit.await_count == 3
    assert recorded == []


@pytest.mark.asyncio
async def test_max_attempts_is_configurable(mock_uow, actor):
    mock_uow.commit.side_effect = UniqueViolation(SLUG_INDEX)

    with pytest.raises(UniqueViolation):
        await CreateOrganizationUseCase(mock_uow, max_attempts=1).execute("Acme Corp", actor.id)

    assert mock_uow.commit.await_count == 1


@pytest.mark.asyncio
async def test_other_errors_are_not_retried(mock_uow, actor):
    mock_uow.commit.side_effect = RuntimeError("connection lost")

    with pytest.raises(RuntimeError):
        await CreateOrganizationUseCase(mock_uow).execute("Acme Corp", actor.id)

    assert mock_uow.commit.await_count == 1

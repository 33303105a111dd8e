from unittest.mock import AsyncMock, MagicMock

import pytest

from organizations.app.services.callbacks import CallbackDispatcher
from organizations.app.services.clock import FrozenClock
from tests.fixtures.factories import NOW

REPOSITORY_METHODS = {
    "users": ("get_by_id", "get_by_email", "create", "delete"),
    "organizations": (
        "get_by_id",
        "get_by_slug",
        "slug_exists",
        "get_by_member",
        "count_owned_by",
        "create",
        "update",
        "delete",
    ),
    "memberships": (
        "get_by_user_and_organization",
        "get_owner",
        "get_by_organization_id",
        "get_member_by_email",
        "create",
        "update",
        "delete",
    ),
    "invitations": (
        "get_by_id",
        "get_by_token",
        "token_exists",
        "get_open_by_organization_and_email",
        "get_pending_by_organization_id",
        "get_pending_by_email",
        "create",
        "update",
        "delete",
    ),
}


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for repo_name, methods in REPOSITORY_METHODS.items():
        repo = MagicMock()
        for method in methods:
            setattr(repo, method, AsyncMock(return_value=None))
        # Writes hand back the entity they were given
        repo.create = AsyncMock(side_effect=lambda entity: entity)
        repo.update = AsyncMock(side_effect=lambda entity: entity)
        setattr(uow, repo_name, repo)

    uow.organizations.slug_exists.return_value = False
    uow.organizations.count_owned_by.return_value = 0
    uow.invitations.token_exists.return_value = False
    return uow


@pytest.fixture
def clock():
    return FrozenClock(NOW)


@pytest.fixture
def dispatcher():
    return CallbackDispatcher()


@pytest.fixture
def recorded(dispatcher):
    """Every dispatched context, in order"""
    events = []
    for event in (
        "organization_created",
        "member_invited",
        "member_joined",
        "member_removed",
        "role_changed",
        "ownership_transferred",
    ):
        dispatcher.register(event, events.append)
    return events


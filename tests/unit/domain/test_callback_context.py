import pytest
from pydantic import ValidationError

from organizations.domain.callback_context import CallbackContext
from organizations.domain.entities import CallbackEvent
from tests.fixtures.factories import make_membership, make_organization, make_user


def test_to_dict_omits_absent_fields():
    organization = make_organization()
    user = make_user()
    membership = make_membership(organization, user)

    context = CallbackContext(
        event=CallbackEvent.role_changed,
        organization=organization,
        membership=membership,
        user=user,
        old_role="member",
        new_role="admin",
    )

    data = context.to_dict()
    assert set(data) == {
        "event",
        "organization",
        "membership",
        "user",
        "old_role",
        "new_role",
    }
    assert data["organization"] is organization
    assert "invitation" not in data
    assert "changed_by" not in data


def test_context_is_immutable():
    context = CallbackContext(event=CallbackEvent.member_removed)

    with pytest.raises(ValidationError):
        context.old_role = "admin"


def test_is_event():
    context = CallbackContext(event="member_joined")

    assert context.event == CallbackEvent.member_joined
    assert context.is_event("member_joined")
    assert context.is_event(CallbackEvent.member_joined)
    assert not context.is_event("member_removed")


def test_unknown_event_rejected():
    with pytest.raises(ValidationError):
        CallbackContext(event="member_teleported")

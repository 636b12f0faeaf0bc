import pytest
from types import SimpleNamespace

from reunion.core.exceptions import AuthenticationError, AuthorizationError
from reunion.core.policy import (
    ADMIN_REQUIRED,
    FORBIDDEN,
    POLICY,
    UNAUTHORIZED,
    Action,
    authorize,
    enforce,
)
from reunion.core.security import Identity
from reunion.models.enums import UserRole

ADMIN = Identity(id="admin-1", email="admin@gmail.com", role=UserRole.ADMIN)
ALUMNI = Identity(id="alumni-1", email="priya@gmail.com", role=UserRole.ALUMNI)
MEMBER = Identity(id="user-1", email="member@gmail.com", role=UserRole.USER)

def test_every_action_has_a_policy():
    assert set(POLICY) == set(Action)

@pytest.mark.parametrize("action", [
    Action.DELETE_EVENT,
    Action.DELETE_HOTEL,
    Action.CREATE_EVENT,
    Action.ADMIN_DELETE_MEMORY,
])
def test_admin_only_actions(action):
    assert authorize(ADMIN, action).allowed
    for identity in (ALUMNI, MEMBER):
        decision = authorize(identity, action)
        assert not decision.allowed
        assert decision.reason == ADMIN_REQUIRED
        assert decision.status_code == 403
    assert authorize(None, action).status_code == 403

@pytest.mark.parametrize("action", [
    Action.SUBMIT_RSVP,
    Action.FETCH_OWN_PROFILE,
    Action.UPDATE_OWN_PROFILE,
    Action.LIST_ALUMNI,
    Action.UPLOAD_FILE,
    Action.CREATE_MEMORY,
])
def test_authenticated_actions(action):
    for identity in (ADMIN, ALUMNI, MEMBER):
        assert authorize(identity, action).allowed
    decision = authorize(None, action)
    assert decision.reason == UNAUTHORIZED
    assert decision.status_code == 401

@pytest.mark.parametrize("action", [
    Action.CREATE_HOTEL,
    Action.LIST_HOTELS,
    Action.LIST_EVENTS,
    Action.LIST_MEMORIES,
    Action.LOOKUP_LOCATIONS,
])
def test_public_actions(action):
    assert authorize(None, action).allowed
    assert authorize(ALUMNI, action).allowed

def test_delete_memory_ownership():
    memory = SimpleNamespace(uploaded_by=ALUMNI.id)

    assert authorize(ALUMNI, Action.DELETE_MEMORY, memory).allowed
    assert authorize(ADMIN, Action.DELETE_MEMORY, memory).allowed

    decision = authorize(MEMBER, Action.DELETE_MEMORY, memory)
    assert decision.reason == FORBIDDEN
    assert decision.status_code == 403

    assert authorize(None, Action.DELETE_MEMORY, memory).status_code == 401

def test_delete_memory_without_resource_checks_session_only():
    assert authorize(MEMBER, Action.DELETE_MEMORY).allowed
    assert authorize(None, Action.DELETE_MEMORY).reason == UNAUTHORIZED

def test_orphaned_memory_is_admin_only():
    memory = SimpleNamespace(uploaded_by=None)
    assert authorize(ADMIN, Action.DELETE_MEMORY, memory).allowed
    assert not authorize(ALUMNI, Action.DELETE_MEMORY, memory).allowed

def test_enforce_raises_matching_errors():
    with pytest.raises(AuthenticationError):
        enforce(None, Action.SUBMIT_RSVP)
    with pytest.raises(AuthorizationError) as exc_info:
        enforce(ALUMNI, Action.DELETE_EVENT)
    assert exc_info.value.detail == "Unauthorized. Admin privileges required."
    enforce(ADMIN, Action.DELETE_EVENT)

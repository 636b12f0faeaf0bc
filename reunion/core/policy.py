"""
Authorization policy.

Every guarded capability is listed once in ``POLICY`` as an ordered tuple of
rules. A rule pairs a predicate over ``(identity, resource)`` with the denial
it produces; the first failing rule decides the outcome. Route handlers never
inspect roles themselves: resource-free actions go through the ``require``
dependency, and handlers that must load a resource first call ``enforce``.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from fastapi import Depends, status

from reunion.core.exceptions import AuthenticationError, AuthorizationError
from reunion.core.security import Identity, get_identity

UNAUTHORIZED = "unauthorized"
FORBIDDEN = "forbidden"
ADMIN_REQUIRED = "admin privileges required"

DENIAL_STATUS = {
    UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ADMIN_REQUIRED: status.HTTP_403_FORBIDDEN,
}

DENIAL_MESSAGES = {
    UNAUTHORIZED: "Unauthorized",
    FORBIDDEN: "Forbidden",
    ADMIN_REQUIRED: "Unauthorized. Admin privileges required.",
}

class Action(str, Enum):
    DELETE_EVENT = "delete_event"
    DELETE_HOTEL = "delete_hotel"
    DELETE_MEMORY = "delete_memory"
    SUBMIT_RSVP = "submit_rsvp"
    FETCH_OWN_PROFILE = "fetch_own_profile"
    UPDATE_OWN_PROFILE = "update_own_profile"
    LIST_ALUMNI = "list_alumni"
    ADMIN_DELETE_MEMORY = "admin_delete_memory"
    UPLOAD_FILE = "upload_file"
    CREATE_MEMORY = "create_memory"
    CREATE_EVENT = "create_event"
    CREATE_HOTEL = "create_hotel"
    LIST_HOTELS = "list_hotels"
    LIST_EVENTS = "list_events"
    LIST_MEMORIES = "list_memories"
    LOOKUP_LOCATIONS = "lookup_locations"

Predicate = Callable[[Optional[Identity], Any], bool]

@dataclass(frozen=True)
class Rule:
    check: Predicate
    denial: str
    # Evaluated only once the handler has loaded the resource
    needs_resource: bool = False

@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str | None = None

    @property
    def status_code(self) -> int:
        if self.allowed:
            return status.HTTP_200_OK
        return DENIAL_STATUS[self.reason]

def is_authenticated(identity: Optional[Identity], resource: Any = None) -> bool:
    return identity is not None

def is_admin(identity: Optional[Identity], resource: Any = None) -> bool:
    return identity is not None and identity.is_admin

def is_owner_or_admin(identity: Optional[Identity], resource: Any) -> bool:
    if identity is None:
        return False
    return identity.is_admin or getattr(resource, "uploaded_by", None) == identity.id

AUTHENTICATED = Rule(is_authenticated, UNAUTHORIZED)
ADMIN_ONLY = Rule(is_admin, ADMIN_REQUIRED)
PUBLIC: Tuple[Rule, ...] = ()

POLICY: Dict[Action, Tuple[Rule, ...]] = {
    Action.DELETE_EVENT: (ADMIN_ONLY,),
    Action.DELETE_HOTEL: (ADMIN_ONLY,),
    Action.DELETE_MEMORY: (AUTHENTICATED, Rule(is_owner_or_admin, FORBIDDEN, needs_resource=True)),
    Action.SUBMIT_RSVP: (AUTHENTICATED,),
    Action.FETCH_OWN_PROFILE: (AUTHENTICATED,),
    Action.UPDATE_OWN_PROFILE: (AUTHENTICATED,),
    Action.LIST_ALUMNI: (AUTHENTICATED,),
    Action.ADMIN_DELETE_MEMORY: (ADMIN_ONLY,),
    Action.UPLOAD_FILE: (AUTHENTICATED,),
    Action.CREATE_MEMORY: (AUTHENTICATED,),
    Action.CREATE_EVENT: (ADMIN_ONLY,),
    Action.CREATE_HOTEL: PUBLIC,
    Action.LIST_HOTELS: PUBLIC,
    Action.LIST_EVENTS: PUBLIC,
    Action.LIST_MEMORIES: PUBLIC,
    Action.LOOKUP_LOCATIONS: PUBLIC,
}

def authorize(identity: Optional[Identity], action: Action, resource: Any = None) -> Decision:
    """Evaluate the policy for an action.

    Without a resource, rules that need one are skipped; handlers call again
    with the loaded resource to finish the check.
    """
    for rule in POLICY[action]:
        if rule.needs_resource and resource is None:
            continue
        if not rule.check(identity, resource):
            return Decision(allowed=False, reason=rule.denial)
    return Decision(allowed=True)

def enforce(identity: Optional[Identity], action: Action, resource: Any = None) -> None:
    """Raise the error matching a denied decision"""
    decision = authorize(identity, action, resource)
    if decision.allowed:
        return
    message = DENIAL_MESSAGES[decision.reason]
    if decision.status_code == status.HTTP_401_UNAUTHORIZED:
        raise AuthenticationError(message)
    raise AuthorizationError(message)

def require(action: Action) -> Callable[..., Any]:
    """Dependency factory guarding a resource-free action.

    The resolved identity is returned so handlers can use it, e.g. to stamp
    the creator of a new row.
    """
    async def dependency(identity: Optional[Identity] = Depends(get_identity)) -> Optional[Identity]:
        enforce(identity, action)
        return identity
    return dependency

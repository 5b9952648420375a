"""
Ownership checks for owned resources.

The same three predicates guard photos, comments and social media
entries: a principal may only create, update or delete records whose
owner id is its own id. Rejection reasons include both ids, which the
API returns to the client as-is.
"""

from typing import NamedTuple, Union

from .exceptions import OwnershipError

OwnerId = Union[int, str]

ALLOWED = "ok"


class Decision(NamedTuple):
    allowed: bool
    reason: str


def _render(owner_id: OwnerId) -> str:
    # ints render as decimal; UUIDs and strings as their text form
    return str(owner_id)


def authorize_create(principal_id: OwnerId, payload_owner_id: OwnerId) -> Decision:
    """A principal may only create records owned by itself."""
    if principal_id != payload_owner_id:
        return Decision(
            False,
            "cannot set new user_id, stay with your id, unauthorized "
            f"{_render(principal_id)}:{_render(payload_owner_id)}",
        )
    return Decision(True, ALLOWED)


def authorize_update(
    principal_id: OwnerId,
    payload_owner_id: OwnerId,
    existing_owner_id: OwnerId,
) -> Decision:
    """
    A principal may only update its own records, and may not hand them
    to someone else.
    """
    if principal_id != payload_owner_id:
        return Decision(
            False,
            "cannot set new user_id, stay with your id, unauthorized "
            f"{_render(principal_id)}:{_render(payload_owner_id)}",
        )
    if principal_id != existing_owner_id:
        return Decision(
            False,
            "cannot update this entity, not yours, unauthorized "
            f"{_render(principal_id)}:{_render(existing_owner_id)}",
        )
    return Decision(True, ALLOWED)


def authorize_delete(existing_owner_id: OwnerId, principal_id: OwnerId) -> Decision:
    """A principal may only delete records it owns."""
    if existing_owner_id != principal_id:
        return Decision(
            False,
            "cannot delete this entity, not yours, unauthorized "
            f"{_render(existing_owner_id)}:{_render(principal_id)}",
        )
    return Decision(True, ALLOWED)


def ensure_allowed(decision: Decision, action: str) -> None:
    """Raise OwnershipError carrying the reason if the decision is a rejection."""
    if not decision.allowed:
        raise OwnershipError(decision.reason, action=action)

"""
Authorization policy.

``authorize`` decides whether an actor may perform an action on a resource.
It only reads attributes of the objects it is given (``id``, ``role`` and
``is_banned`` on the actor, owner ids on the resource) and never queries the
database, so callers pass in fresh rows when freshness matters.
"""

import logging
from enum import Enum

# Canonical role names
ROLE_BUYER = "buyer"
ROLE_SELLER = "seller"
ROLE_ADMIN = "admin"

ROLE_CHOICES = [
    (ROLE_BUYER, "Buyer"),
    (ROLE_SELLER, "Seller"),
    (ROLE_ADMIN, "Admin"),
]

logger = logging.getLogger(__name__)


class Action(str, Enum):
    CREATE_GIG = "create_gig"
    UPDATE_GIG = "update_gig"
    DELETE_GIG = "delete_gig"
    TOGGLE_GIG_STATUS = "toggle_gig_status"
    UPDATE_SELLER_PROFILE = "update_seller_profile"
    BECOME_SELLER = "become_seller"
    CREATE_REVIEW = "create_review"
    UPDATE_ACCOUNT = "update_account"
    DELETE_ACCOUNT = "delete_account"
    VIEW_GIG = "view_gig"


MUTATING_ACTIONS = frozenset(action for action in Action if action is not Action.VIEW_GIG)

# Attribute on the resource that holds the owning user's id
OWNER_ATTRIBUTE = {
    Action.UPDATE_GIG: "seller_id",
    Action.DELETE_GIG: "seller_id",
    Action.TOGGLE_GIG_STATUS: "seller_id",
    Action.UPDATE_SELLER_PROFILE: "user_id",
    Action.UPDATE_ACCOUNT: "id",
    Action.DELETE_ACCOUNT: "id",
}


class PolicyViolation(Exception):
    """Raised by ``authorize`` when an action is denied.

    ``code`` is ``forbidden`` or ``already_seller`` and matches the service
    error codes.
    """

    FORBIDDEN = "forbidden"
    ALREADY_SELLER = "already_seller"

    def __init__(self, code, message):
        super().__init__(message)
        self.code = code
        self.message = message


def is_authenticated(user) -> bool:
    return bool(user is not None and getattr(user, "is_authenticated", False) and getattr(user, "id", None))


def is_admin(user) -> bool:
    """Admin check on the snapshot (role field or Django superuser flag)."""
    if not is_authenticated(user):
        return False
    return getattr(user, "role", None) == ROLE_ADMIN or bool(getattr(user, "is_superuser", False))


def is_seller(user) -> bool:
    return is_authenticated(user) and getattr(user, "role", None) == ROLE_SELLER


def is_owner(user, resource, attribute="seller_id") -> bool:
    if not is_authenticated(user) or resource is None:
        return False
    owner_id = getattr(resource, attribute, None)
    return owner_id is not None and str(owner_id) == str(user.id)


def _deny(actor, action, code, message):
    logger.warning(
        "RBAC denial: user_id=%s action=%s code=%s",
        getattr(actor, "id", None),
        action.value,
        code,
    )
    raise PolicyViolation(code, message)


def authorize(actor, action: Action, resource=None) -> bool:
    """
    Return True when ``actor`` may perform ``action`` on ``resource``.

    Rules are evaluated in order and the first match decides:
      1. Banned or anonymous actors may not perform mutating actions.
      2. Owner rule: owned resources can be mutated by their owner or an admin.
      3. Role gate: creating gigs needs the seller role, becoming a seller
         needs the buyer role.
    Reviews of one's own gig and viewing somebody else's inactive gig are
    denied as well.

    Raises:
        PolicyViolation: with code ``forbidden`` or ``already_seller``
    """
    action = Action(action)

    if action in MUTATING_ACTIONS:
        if not is_authenticated(actor):
            _deny(actor, action, PolicyViolation.FORBIDDEN, "Authentication is required for this action")
        if getattr(actor, "is_banned", False):
            _deny(actor, action, PolicyViolation.FORBIDDEN, "This account is banned")

    if action in OWNER_ATTRIBUTE:
        if resource is None:
            raise ValueError(f"Action {action.value} requires a resource")
        if not (is_admin(actor) or is_owner(actor, resource, OWNER_ATTRIBUTE[action])):
            _deny(actor, action, PolicyViolation.FORBIDDEN, "You do not own this resource")
        return True

    if action is Action.CREATE_GIG:
        if not is_seller(actor):
            _deny(actor, action, PolicyViolation.FORBIDDEN, "Only sellers can create gigs")
        return True

    if action is Action.BECOME_SELLER:
        role = getattr(actor, "role", None)
        if role == ROLE_SELLER:
            _deny(actor, action, PolicyViolation.ALREADY_SELLER, "User is already a seller")
        if role != ROLE_BUYER or is_admin(actor):
            _deny(actor, action, PolicyViolation.FORBIDDEN, "Only buyers can become sellers")
        return True

    if action is Action.CREATE_REVIEW:
        if resource is not None and is_owner(actor, resource, "seller_id"):
            _deny(actor, action, PolicyViolation.FORBIDDEN, "You cannot review your own gig")
        return True

    if action is Action.VIEW_GIG:
        if resource is None:
            raise ValueError("VIEW_GIG requires a resource")
        if getattr(resource, "status", None) != "active" and not (
            is_admin(actor) or is_owner(actor, resource, "seller_id")
        ):
            _deny(actor, action, PolicyViolation.FORBIDDEN, "This gig is not available")
        return True

    return True

# backend/modules/suggestion_boxes/services/access_control.py

"""
Authorization and data-ownership rules for suggestion boxes.

``AccessControl.authorize`` answers one question: may this actor perform this
operation on this resource? It returns ``Allow`` (carrying the rows it loaded)
or ``Deny`` with a reason. Ownership is never taken from the request: every
owner-gated decision reloads the box from the store and compares its current
``owner_id`` with the actor.

``enforce`` is the raising form used by the services.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from sqlalchemy.orm import Session

from core.auth import Actor
from core.exceptions import (
    APIError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from modules.suggestion_boxes.models.box_models import Suggestion, SuggestionBox

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5

BOX_NOT_FOUND = "Suggestion box not found"
SUGGESTION_NOT_FOUND = "Suggestion not found"
INVALID_RATING = f"Rating must be between {MIN_RATING} and {MAX_RATING}"


class Operation(str, enum.Enum):
    """Operations subject to authorization"""
    CREATE_BOX = "box:create"
    READ_BOX = "box:read-one"
    LIST_OWNED_BOXES = "box:read-all-owned"
    UPDATE_BOX = "box:update"
    DELETE_BOX = "box:delete"
    CREATE_SUGGESTION = "suggestion:create"
    LIST_SUGGESTIONS = "suggestion:list-for-box"
    RATE_SUGGESTION = "suggestion:rate"
    EXPORT_SUGGESTIONS = "suggestion:export-csv"


class DenyReason(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class Resource:
    """What an operation targets; ``rating`` is the value being written"""
    box_id: Optional[str] = None
    suggestion_id: Optional[str] = None
    rating: Any = None


@dataclass(frozen=True)
class Allow:
    box: Optional[SuggestionBox] = None
    suggestion: Optional[Suggestion] = None
    allowed: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Deny:
    reason: DenyReason
    message: str
    allowed: bool = field(default=False, init=False)


Decision = Union[Allow, Deny]

_DENY_ERRORS = {
    DenyReason.UNAUTHENTICATED: AuthenticationError,
    DenyReason.FORBIDDEN: ForbiddenError,
    DenyReason.NOT_FOUND: NotFoundError,
    DenyReason.INVALID_INPUT: ValidationError,
}

_DENY_MESSAGES = {
    DenyReason.UNAUTHENTICATED: "Unauthorized",
    DenyReason.FORBIDDEN: "Forbidden",
}

_OWNER_GATED_BOX_OPERATIONS = {
    Operation.UPDATE_BOX,
    Operation.DELETE_BOX,
    Operation.LIST_SUGGESTIONS,
    Operation.EXPORT_SUGGESTIONS,
}


def is_valid_rating(value: Any) -> bool:
    """Integers 1 through 5; booleans are not ratings."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_RATING <= value <= MAX_RATING
    )


def _deny(reason: DenyReason, message: Optional[str] = None) -> Deny:
    return Deny(reason=reason, message=message or _DENY_MESSAGES[reason])


def deny_error(decision: Deny) -> APIError:
    """Map a denial onto the API error taxonomy."""
    return _DENY_ERRORS[decision.reason](decision.message)


class AccessControl:
    """Decides allow/deny for every suggestion box operation"""

    def __init__(self, db: Session):
        self.db = db

    def authorize(
        self, actor: Actor, operation: Operation, resource: Resource = Resource()
    ) -> Decision:
        if operation == Operation.READ_BOX:
            box = self._load_box(resource.box_id)
            if box is None:
                return _deny(DenyReason.NOT_FOUND, BOX_NOT_FOUND)
            return Allow(box=box)

        if operation == Operation.CREATE_SUGGESTION:
            box = self._load_box(resource.box_id)
            if box is None:
                return _deny(DenyReason.NOT_FOUND, BOX_NOT_FOUND)
            return Allow(box=box)

        # Everything below requires an administrator
        if not actor.is_administrator:
            return _deny(DenyReason.UNAUTHENTICATED)

        if operation in (Operation.CREATE_BOX, Operation.LIST_OWNED_BOXES):
            return Allow()

        if operation in _OWNER_GATED_BOX_OPERATIONS:
            box = self._load_box(resource.box_id)
            # A missing box is reported like someone else's box
            if box is None or box.owner_id != actor.id:
                return _deny(DenyReason.FORBIDDEN)
            return Allow(box=box)

        if operation == Operation.RATE_SUGGESTION:
            return self._authorize_rating(actor, resource)

        raise ValueError(f"Unknown operation: {operation}")

    def enforce(
        self, actor: Actor, operation: Operation, resource: Resource = Resource()
    ) -> Allow:
        decision = self.authorize(actor, operation, resource)
        if not decision.allowed:
            logger.info(
                f"Denied {operation.value} for "
                f"{getattr(actor, 'id', 'anonymous')}: {decision.reason.value}"
            )
            raise deny_error(decision)
        return decision

    def _authorize_rating(self, actor: Actor, resource: Resource) -> Decision:
        if not is_valid_rating(resource.rating):
            return _deny(DenyReason.INVALID_INPUT, INVALID_RATING)

        suggestion = self._load_suggestion(resource.suggestion_id)
        if suggestion is None:
            return _deny(DenyReason.NOT_FOUND, SUGGESTION_NOT_FOUND)

        box = self._load_box(suggestion.box_id)
        if box is None:
            # Cascade delete makes this unreachable unless the store was edited by hand
            logger.warning(
                f"Suggestion {suggestion.id} references missing box {suggestion.box_id}"
            )
            return _deny(DenyReason.NOT_FOUND, BOX_NOT_FOUND)

        if box.owner_id != actor.id:
            return _deny(DenyReason.FORBIDDEN)

        return Allow(box=box, suggestion=suggestion)

    def _load_box(self, box_id: Optional[str]) -> Optional[SuggestionBox]:
        if not box_id:
            return None
        # populate_existing refreshes any copy already held by the session
        return (
            self.db.query(SuggestionBox)
            .populate_existing()
            .filter(SuggestionBox.id == box_id)
            .first()
        )

    def _load_suggestion(self, suggestion_id: Optional[str]) -> Optional[Suggestion]:
        if not suggestion_id:
            return None
        return (
            self.db.query(Suggestion)
            .populate_existing()
            .filter(Suggestion.id == suggestion_id)
            .first()
        )

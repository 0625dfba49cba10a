# backend/modules/suggestion_boxes/services/suggestion_service.py

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional
import logging

from core.auth import ANONYMOUS, Actor
from core.exceptions import NotFoundError, StoreError, ValidationError
from modules.suggestion_boxes.models.box_models import Suggestion
from modules.suggestion_boxes.schemas.box_schemas import SuggestionResponse
from modules.suggestion_boxes.services.access_control import (
    INVALID_RATING,
    SUGGESTION_NOT_FOUND,
    AccessControl,
    Operation,
    Resource,
    is_valid_rating,
)

logger = logging.getLogger(__name__)


class SuggestionService:
    """Public submissions and owner-only review of suggestions"""

    def __init__(self, db: Session):
        self.db = db
        self.access = AccessControl(db)

    def submit_suggestion(
        self,
        box_id: str,
        content: str,
        rating: Optional[int] = None,
        actor: Actor = ANONYMOUS,
    ) -> SuggestionResponse:
        """Store a submission from anyone holding the box's link"""

        if not content or not content.strip():
            raise ValidationError("Content is required")

        # The public form sends 0 for "no stars"
        if not rating:
            rating = None
        elif not is_valid_rating(rating):
            raise ValidationError(INVALID_RATING)

        self.access.enforce(actor, Operation.CREATE_SUGGESTION, Resource(box_id=box_id))

        suggestion = Suggestion(
            box_id=box_id,
            content=content,
            rating=rating,
            admin_rating=None,
            is_anonymous=True,
        )

        try:
            self.db.add(suggestion)
            self.db.commit()
            self.db.refresh(suggestion)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating suggestion for box {box_id}: {e}")
            raise StoreError() from e

        logger.info(f"Received suggestion {suggestion.id} for box {box_id}")

        return SuggestionResponse.model_validate(suggestion)

    def list_suggestions(self, actor: Actor, box_id: str) -> List[SuggestionResponse]:
        """All suggestions of an owned box, newest first"""

        self.access.enforce(actor, Operation.LIST_SUGGESTIONS, Resource(box_id=box_id))

        return [
            SuggestionResponse.model_validate(suggestion)
            for suggestion in self.suggestions_for_box(box_id)
        ]

    def suggestions_for_box(self, box_id: str) -> List[Suggestion]:
        return (
            self.db.query(Suggestion)
            .filter(Suggestion.box_id == box_id)
            .order_by(Suggestion.created_at.desc())
            .all()
        )

    def rate_suggestion(
        self, actor: Actor, suggestion_id: str, rating: Optional[int]
    ) -> SuggestionResponse:
        """Record the owner's 1-5 rating of a suggestion"""

        decision = self.access.enforce(
            actor,
            Operation.RATE_SUGGESTION,
            Resource(suggestion_id=suggestion_id, rating=rating),
        )
        suggestion = decision.suggestion
        suggestion.admin_rating = rating

        try:
            self.db.commit()
            self.db.refresh(suggestion)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error rating suggestion {suggestion_id}: {e}")
            raise StoreError() from e

        logger.info(f"Suggestion {suggestion_id} rated {rating} by {actor.id}")

        return SuggestionResponse.model_validate(suggestion)

    def get_suggestion(self, actor: Actor, suggestion_id: str) -> SuggestionResponse:
        """Owner lookup of a single suggestion"""

        suggestion = (
            self.db.query(Suggestion).filter(Suggestion.id == suggestion_id).first()
        )
        if suggestion is None:
            raise NotFoundError(SUGGESTION_NOT_FOUND)

        self.access.enforce(
            actor, Operation.LIST_SUGGESTIONS, Resource(box_id=suggestion.box_id)
        )
        return SuggestionResponse.model_validate(suggestion)


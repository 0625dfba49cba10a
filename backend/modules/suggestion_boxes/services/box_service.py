# backend/modules/suggestion_boxes/services/box_service.py

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional
import logging

from core.auth import Actor
from core.config import settings
from core.exceptions import StoreError
from modules.suggestion_boxes.models.box_models import SuggestionBox
from modules.suggestion_boxes.schemas.box_schemas import (
    BoxCreate,
    BoxUpdate,
    BoxResponse,
    SubmissionLinkResponse,
)
from modules.suggestion_boxes.services.access_control import (
    AccessControl,
    Operation,
    Resource,
)

logger = logging.getLogger(__name__)


def generate_submission_link(box_id: str, origin: str) -> str:
    """Public URL a visitor opens (or scans as a QR code) to submit feedback."""
    return f"{origin.rstrip('/')}/submit/{box_id}"


class SuggestionBoxService:
    """Service for creating and administering suggestion boxes"""

    def __init__(self, db: Session):
        self.db = db
        self.access = AccessControl(db)

    def create_box(self, actor: Actor, box_data: BoxCreate) -> BoxResponse:
        """Create a box owned by the calling administrator"""

        self.access.enforce(actor, Operation.CREATE_BOX)

        box = SuggestionBox(
            owner_id=actor.id,
            title=box_data.title,
            description=box_data.description or "",
            color=box_data.color or settings.default_box_color,
        )

        try:
            self.db.add(box)
            self.db.commit()
            self.db.refresh(box)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating suggestion box: {e}")
            raise StoreError() from e

        logger.info(f"Created suggestion box {box.id} for administrator {actor.id}")

        return BoxResponse.model_validate(box)

    def list_boxes(self, actor: Actor) -> List[BoxResponse]:
        """Boxes owned by the caller, newest first"""

        self.access.enforce(actor, Operation.LIST_OWNED_BOXES)

        boxes = (
            self.db.query(SuggestionBox)
            .filter(SuggestionBox.owner_id == actor.id)
            .order_by(SuggestionBox.created_at.desc())
            .all()
        )
        return [BoxResponse.model_validate(box) for box in boxes]

    def get_box(self, actor: Actor, box_id: str) -> BoxResponse:
        """Public lookup so visitors can render the submission form"""

        decision = self.access.enforce(actor, Operation.READ_BOX, Resource(box_id=box_id))
        return BoxResponse.model_validate(decision.box)

    def update_box(self, actor: Actor, box_id: str, update_data: BoxUpdate) -> BoxResponse:
        """Replace title, description and color of an owned box"""

        decision = self.access.enforce(
            actor, Operation.UPDATE_BOX, Resource(box_id=box_id)
        )
        box = decision.box

        box.title = update_data.title
        box.description = update_data.description or ""
        box.color = update_data.color or settings.default_box_color

        try:
            self.db.commit()
            self.db.refresh(box)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating suggestion box {box_id}: {e}")
            raise StoreError() from e

        logger.info(f"Updated suggestion box {box_id}")

        return BoxResponse.model_validate(box)

    def delete_box(self, actor: Actor, box_id: str) -> bool:
        """Delete an owned box together with all of its suggestions"""

        decision = self.access.enforce(
            actor, Operation.DELETE_BOX, Resource(box_id=box_id)
        )

        try:
            self.db.delete(decision.box)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting suggestion box {box_id}: {e}")
            raise StoreError() from e

        logger.info(f"Deleted suggestion box {box_id} and its suggestions")

        return True

    def submission_link(
        self, actor: Actor, box_id: str, origin: Optional[str] = None
    ) -> SubmissionLinkResponse:
        self.access.enforce(actor, Operation.READ_BOX, Resource(box_id=box_id))
        url = generate_submission_link(box_id, origin or settings.public_origin)
        return SubmissionLinkResponse(box_id=box_id, url=url)

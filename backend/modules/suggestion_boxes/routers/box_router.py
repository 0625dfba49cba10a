# backend/modules/suggestion_boxes/routers/box_router.py

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import Optional
import logging

from core.auth import Actor, Administrator, get_current_actor, require_administrator
from core.database import get_db
from modules.suggestion_boxes.services.box_service import SuggestionBoxService
from modules.suggestion_boxes.schemas.box_schemas import (
    BoxCreate,
    BoxUpdate,
    BoxEnvelope,
    BoxListEnvelope,
    DeleteResult,
    SubmissionLinkResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/suggestion-boxes", tags=["Suggestion Boxes"])


@router.post("", response_model=BoxEnvelope)
async def create_box(
    box_data: BoxCreate,
    db: Session = Depends(get_db),
    actor: Administrator = Depends(require_administrator),
):
    """Create a suggestion box owned by the caller"""

    box = SuggestionBoxService(db).create_box(actor, box_data)
    return BoxEnvelope(box=box)


@router.get("", response_model=BoxListEnvelope)
async def list_boxes(
    db: Session = Depends(get_db),
    actor: Administrator = Depends(require_administrator),
):
    """List the caller's suggestion boxes, newest first"""

    boxes = SuggestionBoxService(db).list_boxes(actor)
    return BoxListEnvelope(boxes=boxes)


@router.get("/{box_id}", response_model=BoxEnvelope)
async def get_box(
    box_id: str = Path(..., description="Suggestion box ID"),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Public box details shown on the submission page"""

    box = SuggestionBoxService(db).get_box(actor, box_id)
    return BoxEnvelope(box=box)


@router.get("/{box_id}/link", response_model=SubmissionLinkResponse)
async def get_submission_link(
    box_id: str = Path(..., description="Suggestion box ID"),
    origin: Optional[str] = Query(
        None, description="Site origin to build the link on; defaults to PUBLIC_ORIGIN"
    ),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Submission URL for sharing or encoding into a QR code"""

    return SuggestionBoxService(db).submission_link(actor, box_id, origin=origin)


@router.put("/{box_id}", response_model=BoxEnvelope)
async def update_box(
    box_data: BoxUpdate,
    box_id: str = Path(..., description="Suggestion box ID"),
    db: Session = Depends(get_db),
    actor: Administrator = Depends(require_administrator),
):
    """Update title, description and color (owner only)"""

    box = SuggestionBoxService(db).update_box(actor, box_id, box_data)
    return BoxEnvelope(box=box)


@router.delete("/{box_id}", response_model=DeleteResult)
async def delete_box(
    box_id: str = Path(..., description="Suggestion box ID"),
    db: Session = Depends(get_db),
    actor: Administrator = Depends(require_administrator),
):
    """Delete a box and all of its suggestions (owner only)"""

    SuggestionBoxService(db).delete_box(actor, box_id)
    return DeleteResult(success=True)

# backend/modules/suggestion_boxes/routers/suggestion_router.py

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
import logging

from core.auth import Actor, Administrator, get_current_actor, require_administrator
from core.database import get_db
from modules.suggestion_boxes.services.suggestion_service import SuggestionService
from modules.suggestion_boxes.schemas.box_schemas import (
    SuggestionCreate,
    SuggestionRate,
    SuggestionEnvelope,
    SuggestionListEnvelope,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/suggestions", tags=["Suggestions"])


@router.post("", response_model=SuggestionEnvelope)
async def submit_suggestion(
    submission: SuggestionCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Submit anonymous feedback to a box (no authentication required)"""

    suggestion = SuggestionService(db).submit_suggestion(
        submission.box_id, submission.content, submission.rating, actor=actor
    )
    return SuggestionEnvelope(suggestion=suggestion)


@router.get("/{box_id}", response_model=SuggestionListEnvelope)
async def list_suggestions(
    box_id: str = Path(..., description="Suggestion box ID"),
    db: Session = Depends(get_db),
    actor: Administrator = Depends(require_administrator),
):
    """List a box's suggestions, newest first (owner only)"""

    suggestions = SuggestionService(db).list_suggestions(actor, box_id)
    return SuggestionListEnvelope(suggestions=suggestions)


@router.post("/{suggestion_id}/rate", response_model=SuggestionEnvelope)
async def rate_suggestion(
    rating_data: SuggestionRate,
    suggestion_id: str = Path(..., description="Suggestion ID"),
    db: Session = Depends(get_db),
    actor: Administrator = Depends(require_administrator),
):
    """Set the owner's 1-5 rating on a suggestion"""

    suggestion = SuggestionService(db).rate_suggestion(
        actor, suggestion_id, rating_data.rating
    )
    return SuggestionEnvelope(suggestion=suggestion)

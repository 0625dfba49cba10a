# backend/modules/suggestion_boxes/tests/conftest.py

import pytest
from sqlalchemy.orm import Session

from core.auth import Administrator
from modules.suggestion_boxes.models.box_models import Suggestion, SuggestionBox
from modules.suggestion_boxes.schemas.box_schemas import BoxCreate
from modules.suggestion_boxes.services.access_control import AccessControl
from modules.suggestion_boxes.services.box_service import SuggestionBoxService
from modules.suggestion_boxes.services.export_service import SuggestionExportService
from modules.suggestion_boxes.services.suggestion_service import SuggestionService


# Service fixtures
@pytest.fixture
def access_control(db_session: Session) -> AccessControl:
    return AccessControl(db_session)


@pytest.fixture
def box_service(db_session: Session) -> SuggestionBoxService:
    return SuggestionBoxService(db_session)


@pytest.fixture
def suggestion_service(db_session: Session) -> SuggestionService:
    return SuggestionService(db_session)


@pytest.fixture
def export_service(db_session: Session) -> SuggestionExportService:
    return SuggestionExportService(db_session)


# Data fixtures
@pytest.fixture
def sample_box(db_session: Session, box_service, actor_a: Administrator) -> SuggestionBox:
    """Box owned by administrator A"""
    created = box_service.create_box(
        actor_a, BoxCreate(title="Feedback", color="#3B82F6")
    )
    return db_session.get(SuggestionBox, created.id)


@pytest.fixture
def sample_suggestion(db_session: Session, suggestion_service, sample_box) -> Suggestion:
    created = suggestion_service.submit_suggestion(sample_box.id, "Great app", 5)
    return db_session.get(Suggestion, created.id)

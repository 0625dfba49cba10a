# backend/modules/suggestion_boxes/services/export_service.py

"""
CSV export of a box's suggestions.

The layout matches files produced by earlier releases byte for byte: an
unquoted header line, every data field wrapped in double quotes (embedded
quotes doubled), ``\\n`` between lines and no newline after the last row.
"""

import csv
import io
import logging
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from core.auth import Actor
from core.mixins import as_utc
from modules.suggestion_boxes.models.box_models import Suggestion
from modules.suggestion_boxes.services.access_control import (
    AccessControl,
    Operation,
    Resource,
)
from modules.suggestion_boxes.services.suggestion_service import SuggestionService

logger = logging.getLogger(__name__)

CSV_HEADERS = ["ID", "Content", "Rating", "Admin Rating", "Anonymous", "Created At"]
CSV_LINE_TERMINATOR = "\n"


def export_filename(box_id: str) -> str:
    return f"suggestions-{box_id}.csv"


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return as_utc(value).isoformat()


def _optional_rating(value: Optional[int]) -> str:
    return "" if value is None else str(value)


def _format_csv_row(suggestion: Suggestion) -> List[str]:
    return [
        suggestion.id,
        suggestion.content,
        _optional_rating(suggestion.rating),
        _optional_rating(suggestion.admin_rating),
        "true" if suggestion.is_anonymous else "false",
        format_timestamp(suggestion.created_at),
    ]


def render_csv(suggestions: Iterable[Suggestion]) -> str:
    """Serialize suggestions in the order given."""

    output = io.StringIO()
    output.write(",".join(CSV_HEADERS) + CSV_LINE_TERMINATOR)

    writer = csv.writer(
        output, quoting=csv.QUOTE_ALL, lineterminator=CSV_LINE_TERMINATOR
    )
    row_count = 0
    for suggestion in suggestions:
        writer.writerow(_format_csv_row(suggestion))
        row_count += 1

    content = output.getvalue()
    if row_count:
        # Rows are separated, not terminated
        content = content[: -len(CSV_LINE_TERMINATOR)]
    return content


class SuggestionExportService:
    """Owner-only CSV export"""

    def __init__(self, db: Session):
        self.db = db
        self.access = AccessControl(db)
        self.suggestions = SuggestionService(db)

    def export_csv(self, actor: Actor, box_id: str) -> bytes:
        self.access.enforce(
            actor, Operation.EXPORT_SUGGESTIONS, Resource(box_id=box_id)
        )

        suggestions = self.suggestions.suggestions_for_box(box_id)
        logger.info(f"Exporting {len(suggestions)} suggestions for box {box_id}")

        return render_csv(suggestions).encode("utf-8")

# backend/modules/suggestion_boxes/routers/export_router.py

import io

from fastapi import APIRouter, Depends, Path
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from core.auth import Administrator, require_administrator
from core.database import get_db
from modules.suggestion_boxes.services.export_service import (
    SuggestionExportService,
    export_filename,
)

router = APIRouter(prefix="/export", tags=["Export"])


@router.get("/{box_id}")
async def export_suggestions(
    box_id: str = Path(..., description="Suggestion box ID"),
    db: Session = Depends(get_db),
    actor: Administrator = Depends(require_administrator),
):
    """
    Download every suggestion of a box as CSV (owner only).

    Columns: ID, Content, Rating, Admin Rating, Anonymous, Created At.
    Rows are ordered newest first.
    """
    data = SuggestionExportService(db).export_csv(actor, box_id)

    return StreamingResponse(
        io.BytesIO(data),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(box_id)}"'
        },
    )

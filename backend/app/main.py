from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from core.config import settings
from core.database import Base, engine, get_db
from core.exceptions import register_exception_handlers
from core.logging_config import configure_logging
from core.request_logging import RequestLoggingMiddleware

# ========== Authentication ==========
from modules.auth.routes.auth_routes import router as auth_router

# ========== Suggestion Boxes ==========
from modules.suggestion_boxes.routers.box_router import router as box_router
from modules.suggestion_boxes.routers.suggestion_router import router as suggestion_router
from modules.suggestion_boxes.routers.export_router import router as export_router

configure_logging(settings.log_level, settings.log_sql_queries)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting suggestion box API in {settings.environment.upper()} mode")
    if settings.auto_create_tables:
        # Development convenience; deployments run `alembic upgrade head`
        Base.metadata.create_all(bind=engine)
    yield
    logger.info("Suggestion box API shutting down")


app = FastAPI(
    title="Suggestion Box API",
    description="""
    Collect anonymous feedback through shareable suggestion boxes.

    ## Features

    * **Suggestion Boxes** - Administrators create boxes and share a submission link or QR code
    * **Anonymous Submissions** - Anyone with the link can submit a suggestion and a 1-5 star rating
    * **Review** - Box owners list and rate suggestions
    * **Export** - Box owners download all suggestions as CSV

    ## Authentication

    Owner endpoints require a JWT bearer token. Register with `/auth/signup`
    and obtain a token from `/auth/login`.
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(RequestLoggingMiddleware)

# CORS middleware last so it runs first for preflight requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(box_router)
app.include_router(suggestion_router)
app.include_router(export_router)


@app.get("/health", tags=["Health"])
def health_check(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok"}


@app.get("/")
def read_root():
    return {"message": "Suggestion Box API is running"}

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO", log_sql_queries: bool = False) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)

    # SQLAlchemy echoes through its own logger when enabled
    if log_sql_queries:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    # Uvicorn's access log duplicates the request lines we already emit
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

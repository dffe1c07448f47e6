import logging

from groupsplit.core.config import settings


def configure_logging() -> None:
    """Configure root logging once, at application startup."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

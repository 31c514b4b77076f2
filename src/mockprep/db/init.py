from __future__ import annotations

import logging
from pathlib import Path

from mockprep.config import get_settings
from mockprep.db.base import Base
from mockprep.db.session import engine
from mockprep.db import models  # noqa: F401

logger = logging.getLogger(__name__)


def ensure_data_directories() -> None:
    settings = get_settings()
    paths: list[Path] = [settings.data_dir, settings.resume_dir]
    for path in paths:
        path.mkdir(parents=True, exist_ok=True)


def init_database(*, reset: bool = False) -> dict[str, int]:
    """Create every table; with ``reset`` drop the existing ones first."""
    ensure_data_directories()
    if reset:
        logger.warning("Dropping all tables on %s", engine.url.render_as_string(hide_password=True))
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    return {"tables": len(Base.metadata.tables), "reset": int(reset)}

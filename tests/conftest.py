from __future__ import annotations

import os
import tempfile
from pathlib import Path

_DATA_DIR = Path(tempfile.mkdtemp(prefix="mockprep-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_DATA_DIR / 'test.db'}"
os.environ["DATA_DIR"] = str(_DATA_DIR)
os.environ["RESUME_DIR"] = str(_DATA_DIR / "resumes")
os.environ["APP_ENV"] = "test"
os.environ["SCORING_STRATEGY"] = "fixed"
os.environ["FIXED_SCORE"] = "80"

import pytest  # noqa: E402

from mockprep.db.base import Base  # noqa: E402
from mockprep.db import models  # noqa: E402,F401
from mockprep.db.session import engine  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield

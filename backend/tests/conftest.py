"""
Pytest configuration and shared fixtures.
"""

import os
import tempfile
import uuid
from pathlib import Path

_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="talentmatch-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB_DIR / 'test.db'}"

import pytest  # noqa: E402

from talentmatch import models  # noqa: E402
from talentmatch.db import Base, SessionLocal, engine, init_db  # noqa: E402


@pytest.fixture(autouse=True)
def clean_database():
    init_db()
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db():
    with SessionLocal() as session:
        yield session


@pytest.fixture
def make_user(db):
    def _make_user(**overrides) -> models.User:
        fields = {
            "email": f"user-{uuid.uuid4().hex[:8]}@example.com",
            "name": "Asha Candidate",
            "skills_json": ["React", "Node.js"],
            "experience": "mid",
            "location": "Bangalore, India",
        }
        fields.update(overrides)
        user = models.User(**fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_job(db):
    def _make_job(**overrides) -> models.Job:
        fields = {
            "title": "Frontend Engineer",
            "description": "Build React interfaces for our marketplace.",
            "company": "Acme",
            "location": "Bangalore",
            "remote": False,
            "job_type": "full-time",
            "experience": "mid",
            "skills_json": ["React", "Node.js"],
        }
        fields.update(overrides)
        job = models.Job(**fields)
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    return _make_job

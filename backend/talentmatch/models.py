from __future__ import annotations

import uuid
from datetime import datetime, timedelta

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from talentmatch.config import settings
from talentmatch.db import Base


def _uuid() -> str:
    return str(uuid.uuid4())


def _default_expiry() -> datetime:
    return datetime.utcnow() + timedelta(days=settings.job_lifetime_days)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")

    skills_json: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    experience: Mapped[str | None] = mapped_column(String(32), nullable=True, default="entry")
    location: Mapped[str | None] = mapped_column(String(255), nullable=True, default="")

    is_employer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    jobs_posted: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    jobs_applied: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    posted_jobs: Mapped[list[Job]] = relationship("Job", back_populates="employer")
    applications: Mapped[list[JobApplication]] = relationship(
        "JobApplication", back_populates="applicant", cascade="all, delete-orphan"
    )

    @property
    def skills(self) -> list[str]:
        return list(self.skills_json or [])


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    employer_id: Mapped[str | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    remote: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    job_type: Mapped[str] = mapped_column(String(32), nullable=False, default="full-time")
    experience: Mapped[str] = mapped_column(String(32), nullable=False, default="entry")
    skills_json: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    status: Mapped[str] = mapped_column(String(32), nullable=False, default="active")
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    applications_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_default_expiry)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    employer: Mapped[User | None] = relationship("User", back_populates="posted_jobs")
    applications: Mapped[list[JobApplication]] = relationship(
        "JobApplication", back_populates="job", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_jobs_status_expires", "status", "expires_at"),
        Index("idx_jobs_status_created", "status", "created_at"),
    )

    @property
    def skills(self) -> list[str]:
        return list(self.skills_json or [])


class JobApplication(Base):
    __tablename__ = "job_applications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    applicant_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    cover_letter: Mapped[str | None] = mapped_column(Text, nullable=True)
    resume: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending")
    match_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    applied_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    job: Mapped[Job] = relationship("Job", back_populates="applications")
    applicant: Mapped[User] = relationship("User", back_populates="applications")

    __table_args__ = (UniqueConstraint("job_id", "applicant_id", name="uq_job_applications_job_applicant"),)

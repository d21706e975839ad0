from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Any

from sqlalchemy import desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from talentmatch import models
from talentmatch.logger import get_logger, with_context
from talentmatch.services.match_engine import (
    CandidateProfile,
    MatchResult,
    overall_score,
    recommend,
    suitable_levels,
)

logger = get_logger(__name__)

ACTIVE_STATUS = "active"


def score_job_for_user(job: models.Job, user: models.User) -> MatchResult:
    return overall_score(job, user)


def load_candidate_jobs(db: Session, user: models.User, *, now: datetime | None = None) -> list[models.Job]:
    """Active, unexpired jobs that pass the profile pre-filter, newest first."""
    now = now or datetime.utcnow()
    rows = db.scalars(
        select(models.Job)
        .where(models.Job.status == ACTIVE_STATUS, models.Job.expires_at > now)
        .order_by(desc(models.Job.created_at))
    ).all()

    profile = CandidateProfile.from_record(user)
    user_skills = set(profile.skills)
    levels = suitable_levels(profile.experience) if profile.experience else None
    user_location = profile.location.lower()

    out: list[models.Job] = []
    for job in rows:
        if user_skills and not user_skills.intersection(job.skills):
            continue
        if levels is not None and job.experience not in levels:
            continue
        if user_location and not (job.remote or user_location in (job.location or "").lower()):
            continue
        out.append(job)
    return out


def recommend_for_user(db: Session, user: models.User, *, limit: int) -> list[tuple[models.Job, MatchResult]]:
    candidates = load_candidate_jobs(db, user)
    ranked = recommend(candidates, user, limit)
    logger.debug(
        with_context(
            "Ranked recommendations",
            user_id=user.id,
            candidates=len(candidates),
            returned=len(ranked),
        )
    )
    return ranked


def apply_to_job(
    db: Session,
    *,
    job_id: str,
    user: models.User,
    cover_letter: str | None = None,
    resume: str | None = None,
) -> models.JobApplication:
    job = db.get(models.Job, job_id)
    if not job:
        raise LookupError("Job not found")
    if job.status != ACTIVE_STATUS:
        raise ValueError("Job is not active")

    existing = db.scalar(
        select(models.JobApplication).where(
            models.JobApplication.job_id == job.id,
            models.JobApplication.applicant_id == user.id,
        )
    )
    if existing:
        raise ValueError("You have already applied for this job")

    result = score_job_for_user(job, user)
    application = models.JobApplication(
        job_id=job.id,
        applicant_id=user.id,
        cover_letter=cover_letter,
        resume=resume,
        match_score=result.overall_score,
        applied_at=datetime.utcnow(),
    )
    try:
        db.add(application)
        db.flush()

        job.applications_count = db.scalar(
            select(func.count(models.JobApplication.id)).where(models.JobApplication.job_id == job.id)
        ) or 0
        user.jobs_applied = (user.jobs_applied or 0) + 1
        db.add(job)
        db.add(user)
        db.commit()
    except IntegrityError as exc:
        # A concurrent request inserted the same (job, applicant) pair first.
        logger.info(with_context("Duplicate application rejected", job_id=job_id, user_id=user.id))
        db.rollback()
        raise ValueError("You have already applied for this job") from exc
    db.refresh(application)

    logger.info(
        with_context(
            "Application submitted",
            job_id=job.id,
            user_id=user.id,
            match_score=result.overall_score,
        )
    )
    return application


def activate_all_jobs(db: Session) -> tuple[int, int]:
    """Flip every non-active job back to active; returns (updated, total active)."""
    result = db.execute(
        update(models.Job)
        .where(models.Job.status != ACTIVE_STATUS)
        .values(status=ACTIVE_STATUS, updated_at=datetime.utcnow())
    )
    db.commit()

    total_active = db.scalar(
        select(func.count(models.Job.id)).where(models.Job.status == ACTIVE_STATUS)
    ) or 0
    updated = result.rowcount or 0
    logger.info(with_context("Activated jobs", updated=updated, total_active=total_active))
    return updated, total_active


def market_trends(db: Session, *, top_skills: int = 10) -> dict[str, Any]:
    active_jobs = db.scalars(select(models.Job).where(models.Job.status == ACTIVE_STATUS)).all()

    skill_counts: Counter[str] = Counter()
    for job in active_jobs:
        skill_counts.update(job.skills)

    # Counter.most_common keeps first-seen order among equal counts.
    popular = [{"skill": skill, "count": count} for skill, count in skill_counts.most_common(top_skills)]

    return {
        "popular_skills": popular,
        "job_type_distribution": _distribution(db, models.Job.job_type),
        "experience_distribution": _distribution(db, models.Job.experience),
        "total_active_jobs": len(active_jobs),
    }


def _distribution(db: Session, column) -> list[dict[str, Any]]:
    count = func.count(models.Job.id).label("count")
    rows = db.execute(
        select(column, count)
        .where(models.Job.status == ACTIVE_STATUS)
        .group_by(column)
        .order_by(desc(count), column)
    ).all()
    return [{"id": value, "count": total} for value, total in rows]

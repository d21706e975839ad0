from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from talentmatch import models
from talentmatch.config import settings
from talentmatch.db import get_db
from talentmatch.deps import get_current_user
from talentmatch.logger import get_logger, with_context
from talentmatch.schemas import (
    AnalyzeJobIn,
    DistributionOut,
    EmployerOut,
    ExtractSkillsIn,
    ExtractSkillsOut,
    JobAnalysisOut,
    MarketTrendsOut,
    MatchBreakdownOut,
    MatchScoreIn,
    MatchScoreOut,
    RecommendationsOut,
    RecommendedJobOut,
    ResumeSkillsOut,
    SkillCountOut,
    SkillSuggestionsIn,
    SkillSuggestionsOut,
    UserProfileOut,
)
from talentmatch.services.recommendation_service import market_trends, recommend_for_user, score_job_for_user
from talentmatch.services.resume_extract import SUPPORTED_SUFFIXES, extract_text_from_upload
from talentmatch.services.skill_catalog import analyze_job_description, extract_skills, suggest_skills

router = APIRouter(prefix="/ai", tags=["ai"])
logger = get_logger(__name__)


@router.post("/match-score", response_model=MatchScoreOut)
def match_score(
    payload: MatchScoreIn,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MatchScoreOut:
    job = db.get(models.Job, payload.job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job or user not found")

    result = score_job_for_user(job, user)
    breakdown = result.breakdown()
    breakdown["skillsMatch"] = round(result.skills_match, 2)
    return MatchScoreOut(match_score=result.overall_score, breakdown=MatchBreakdownOut(**breakdown))


@router.get("/recommendations", response_model=RecommendationsOut)
def recommendations(
    limit: int = Query(default=settings.recommendation_limit, ge=1, le=100),
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> RecommendationsOut:
    ranked = recommend_for_user(db, user, limit=limit)
    return RecommendationsOut(
        recommendations=[_serialize_recommended(job, result.overall_score) for job, result in ranked],
        user_profile=UserProfileOut(
            skills=user.skills,
            experience=user.experience,
            location=user.location,
        ),
    )


@router.post("/extract-skills", response_model=ExtractSkillsOut)
def post_extract_skills(payload: ExtractSkillsIn) -> ExtractSkillsOut:
    if not payload.text:
        raise HTTPException(status_code=400, detail="Text is required")

    extraction = extract_skills(payload.text)
    return ExtractSkillsOut(skills=extraction.skills, confidence=extraction.confidence)


@router.post("/extract-skills-resume", response_model=ResumeSkillsOut)
async def post_extract_skills_resume(resume: UploadFile | None = File(default=None)) -> ResumeSkillsOut:
    if resume is None:
        raise HTTPException(status_code=400, detail="Resume file is required")

    filename = resume.filename or "resume"
    if not filename.lower().endswith(SUPPORTED_SUFFIXES):
        raise HTTPException(status_code=400, detail="Only PDF, DOC, and DOCX files are allowed")

    content = await resume.read()
    if not content:
        raise HTTPException(status_code=400, detail="Empty file")
    if len(content) > settings.max_resume_bytes:
        raise HTTPException(status_code=413, detail="Resume file is too large")

    try:
        text = extract_text_from_upload(filename, content)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(with_context("Resume parsing failed", file_name=filename, error=str(exc)))
        raise HTTPException(status_code=400, detail="Could not read resume file") from exc

    extraction = extract_skills(text)
    return ResumeSkillsOut(skills=extraction.skills, confidence=extraction.confidence, file_name=filename)


@router.post("/skill-suggestions", response_model=SkillSuggestionsOut)
def post_skill_suggestions(payload: SkillSuggestionsIn) -> SkillSuggestionsOut:
    if not payload.partial_skill:
        raise HTTPException(status_code=400, detail="Partial skill is required")
    return SkillSuggestionsOut(suggestions=suggest_skills(payload.partial_skill))


@router.post("/analyze-job", response_model=JobAnalysisOut)
def post_analyze_job(payload: AnalyzeJobIn) -> JobAnalysisOut:
    if not payload.description:
        raise HTTPException(status_code=400, detail="Description is required")

    analysis = analyze_job_description(payload.description)
    return JobAnalysisOut(
        key_phrases=analysis.key_phrases,
        requirements=analysis.requirements,
        benefits=analysis.benefits,
        complexity_score=analysis.complexity_score,
        word_count=analysis.word_count,
    )


@router.get("/market-trends", response_model=MarketTrendsOut)
def get_market_trends(db: Session = Depends(get_db)) -> MarketTrendsOut:
    trends = market_trends(db)
    return MarketTrendsOut(
        popular_skills=[SkillCountOut(**item) for item in trends["popular_skills"]],
        job_type_distribution=[DistributionOut(**item) for item in trends["job_type_distribution"]],
        experience_distribution=[DistributionOut(**item) for item in trends["experience_distribution"]],
        total_active_jobs=trends["total_active_jobs"],
    )


def _serialize_recommended(job: models.Job, match_score: int) -> RecommendedJobOut:
    employer = job.employer
    return RecommendedJobOut(
        id=job.id,
        title=job.title,
        description=job.description,
        company=job.company,
        location=job.location,
        remote=job.remote,
        type=job.job_type,
        experience=job.experience,
        skills=job.skills,
        status=job.status,
        views=job.views,
        applications_count=job.applications_count,
        expires_at=job.expires_at,
        created_at=job.created_at,
        employer=(
            EmployerOut(id=employer.id, name=employer.name, company=employer.company) if employer else None
        ),
        match_score=match_score,
    )

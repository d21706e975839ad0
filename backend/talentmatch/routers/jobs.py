from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from talentmatch import models
from talentmatch.db import get_db
from talentmatch.deps import get_current_user
from talentmatch.schemas import ApplyIn, ApplyOut
from talentmatch.services.recommendation_service import apply_to_job

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("/{job_id}/apply", response_model=ApplyOut)
def post_apply(
    job_id: str,
    payload: ApplyIn,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApplyOut:
    try:
        application = apply_to_job(
            db,
            job_id=job_id,
            user=user,
            cover_letter=payload.cover_letter,
            resume=payload.resume,
        )
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return ApplyOut(message="Application submitted successfully", match_score=application.match_score)

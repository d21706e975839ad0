from __future__ import annotations

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from talentmatch import models
from talentmatch.db import get_db


def get_current_user(
    x_user_id: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> models.User:
    """Load the caller; identity is resolved upstream and forwarded as ``X-User-Id``."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing user identity")

    user = db.get(models.User, x_user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

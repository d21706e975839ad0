from fastapi.testclient import TestClient
from sqlalchemy import select

from talentmatch import models
from talentmatch.db import SessionLocal
from talentmatch.main import app


def test_apply_stores_application_with_match_score(make_user, make_job):
    user = make_user(skills_json=["React"], experience="mid", location="Bangalore, India")
    job = make_job(skills_json=["React", "Node.js"], experience="senior", location="Bangalore")

    with TestClient(app) as client:
        response = client.post(
            f"/api/jobs/{job.id}/apply",
            json={"coverLetter": "Happy to help", "resume": "https://example.com/cv.pdf"},
            headers={"X-User-Id": user.id},
        )
        again = client.post(f"/api/jobs/{job.id}/apply", json={}, headers={"X-User-Id": user.id})

    assert response.status_code == 200
    assert response.json() == {"message": "Application submitted successfully", "matchScore": 68}
    assert again.status_code == 400
    assert again.json()["detail"] == "You have already applied for this job"

    with SessionLocal() as db:
        application = db.scalar(select(models.JobApplication).where(models.JobApplication.job_id == job.id))
        assert application is not None
        assert application.match_score == 68
        assert application.cover_letter == "Happy to help"
        assert application.status == "pending"
        assert db.get(models.Job, job.id).applications_count == 1
        assert db.get(models.User, user.id).jobs_applied == 1


def test_apply_to_inactive_or_missing_job(make_user, make_job):
    user = make_user()
    closed = make_job(status="closed")

    with TestClient(app) as client:
        inactive = client.post(f"/api/jobs/{closed.id}/apply", json={}, headers={"X-User-Id": user.id})
        missing = client.post("/api/jobs/missing/apply", json={}, headers={"X-User-Id": user.id})

    assert inactive.status_code == 400
    assert inactive.json()["detail"] == "Job is not active"
    assert missing.status_code == 404

from datetime import datetime, timedelta
from io import BytesIO

from fastapi.testclient import TestClient

from talentmatch.config import settings
from talentmatch.main import app


def test_health():
    with TestClient(app) as client:
        response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_match_score_returns_score_and_breakdown(make_user, make_job):
    user = make_user(skills_json=["React"], experience="mid", location="Bangalore, India")
    job = make_job(skills_json=["React", "Node.js"], experience="senior", location="Bangalore")

    with TestClient(app) as client:
        response = client.post(
            "/api/ai/match-score",
            json={"jobId": job.id},
            headers={"X-User-Id": user.id},
        )

    assert response.status_code == 200
    body = response.json()
    # 50 * 0.5 + 75 * 0.3 + 100 * 0.2 = 67.5
    assert body["matchScore"] == 68
    assert body["breakdown"] == {
        "skillsMatch": 50.0,
        "experienceMatch": 75,
        "locationMatch": 100,
        "overallScore": 68,
    }


def test_match_score_for_job_without_skills_is_not_nan(make_user, make_job):
    user = make_user(skills_json=["React"])
    job = make_job(skills_json=[], remote=True)

    with TestClient(app) as client:
        response = client.post(
            "/api/ai/match-score",
            json={"jobId": job.id},
            headers={"X-User-Id": user.id},
        )

    assert response.status_code == 200
    assert response.json()["breakdown"]["skillsMatch"] == 0


def test_match_score_unknown_job_or_user(make_user):
    user = make_user()

    with TestClient(app) as client:
        missing_job = client.post(
            "/api/ai/match-score",
            json={"jobId": "does-not-exist"},
            headers={"X-User-Id": user.id},
        )
        missing_user = client.post(
            "/api/ai/match-score",
            json={"jobId": "does-not-exist"},
            headers={"X-User-Id": "nobody"},
        )
        anonymous = client.post("/api/ai/match-score", json={"jobId": "does-not-exist"})

    assert missing_job.status_code == 404
    assert missing_user.status_code == 404
    assert anonymous.status_code == 401


def test_recommendations_are_filtered_and_sorted_by_match_score(make_user, make_job):
    user = make_user(skills_json=["React", "Solidity"], experience="senior", location="Bangalore")
    partial = make_job(title="Partial", skills_json=["React", "Go"], experience="mid", location="Bangalore")
    full = make_job(title="Full", skills_json=["React", "Solidity"], experience="senior", location="Remote", remote=True)
    make_job(title="Too senior", skills_json=["React"], experience="executive", location="Bangalore")
    make_job(title="No shared skill", skills_json=["Go"], experience="mid", location="Bangalore")
    make_job(title="Elsewhere", skills_json=["React"], experience="mid", location="Berlin")
    make_job(title="Closed", skills_json=["React"], experience="mid", location="Bangalore", status="closed")
    make_job(
        title="Expired",
        skills_json=["React"],
        experience="mid",
        location="Bangalore",
        expires_at=datetime.utcnow() - timedelta(days=1),
    )

    with TestClient(app) as client:
        response = client.get("/api/ai/recommendations", headers={"X-User-Id": user.id})

    assert response.status_code == 200
    body = response.json()
    titles = [item["title"] for item in body["recommendations"]]
    assert titles == ["Full", "Partial"]
    assert body["recommendations"][0]["id"] == full.id
    assert body["recommendations"][0]["matchScore"] == 100
    assert body["recommendations"][1]["id"] == partial.id
    assert body["recommendations"][1]["matchScore"] == 75
    assert body["userProfile"] == {
        "skills": ["React", "Solidity"],
        "experience": "senior",
        "location": "Bangalore",
    }


def test_recommendations_respect_limit(make_user, make_job):
    user = make_user(skills_json=["React"], experience="mid", location="")
    for index in range(4):
        make_job(title=f"Job {index}", skills_json=["React"], experience="entry")

    with TestClient(app) as client:
        response = client.get("/api/ai/recommendations?limit=2", headers={"X-User-Id": user.id})

    assert response.status_code == 200
    assert len(response.json()["recommendations"]) == 2


def test_extract_skills_endpoint():
    with TestClient(app) as client:
        response = client.post("/api/ai/extract-skills", json={"text": "Solidity and Ethereum smart contract work"})
        empty = client.post("/api/ai/extract-skills", json={"text": ""})

    assert response.status_code == 200
    body = response.json()
    assert "Solidity" in body["skills"]
    assert "Ethereum" in body["skills"]
    assert body["confidence"] == 0.8
    assert empty.status_code == 400


def test_extract_skills_from_resume(monkeypatch):
    monkeypatch.setattr(
        "talentmatch.services.resume_extract._extract_pdf",
        lambda _: "Jane Doe\nSkills: Python, PostgreSQL, Docker",
    )

    with TestClient(app) as client:
        response = client.post(
            "/api/ai/extract-skills-resume",
            files={"resume": ("resume.pdf", BytesIO(b"%PDF-fake"), "application/pdf")},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["fileName"] == "resume.pdf"
    assert {"Python", "PostgreSQL", "Docker"} <= set(body["skills"])


def test_extract_skills_from_resume_rejects_bad_uploads(monkeypatch):
    monkeypatch.setattr(settings, "max_resume_bytes", 8)

    with TestClient(app) as client:
        missing = client.post("/api/ai/extract-skills-resume")
        wrong_type = client.post(
            "/api/ai/extract-skills-resume",
            files={"resume": ("resume.png", BytesIO(b"png"), "image/png")},
        )
        too_large = client.post(
            "/api/ai/extract-skills-resume",
            files={"resume": ("resume.pdf", BytesIO(b"0123456789"), "application/pdf")},
        )

    assert missing.status_code == 400
    assert wrong_type.status_code == 400
    assert too_large.status_code == 413


def test_skill_suggestions_endpoint():
    with TestClient(app) as client:
        response = client.post("/api/ai/skill-suggestions", json={"partialSkill": "sql"})
        empty = client.post("/api/ai/skill-suggestions", json={})

    assert response.status_code == 200
    assert response.json()["suggestions"] == ["PostgreSQL", "MySQL", "SQL"]
    assert empty.status_code == 400


def test_analyze_job_endpoint():
    with TestClient(app) as client:
        response = client.post(
            "/api/ai/analyze-job",
            json={"description": "Design the API and database architecture."},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["complexityScore"] == 60
    assert body["wordCount"] == 6
    assert "keyPhrases" in body


def test_market_trends(make_job):
    make_job(skills_json=["React", "Node.js"], job_type="full-time", experience="mid")
    make_job(skills_json=["React"], job_type="contract", experience="mid")
    make_job(skills_json=["Solidity"], job_type="full-time", experience="senior")
    make_job(skills_json=["Go"], job_type="full-time", experience="senior", status="paused")

    with TestClient(app) as client:
        response = client.get("/api/ai/market-trends")

    assert response.status_code == 200
    body = response.json()
    assert body["totalActiveJobs"] == 3
    assert body["popularSkills"][0] == {"skill": "React", "count": 2}
    assert {item["skill"] for item in body["popularSkills"]} == {"React", "Node.js", "Solidity"}
    assert body["jobTypeDistribution"][0] == {"_id": "full-time", "count": 2}
    assert {item["_id"]: item["count"] for item in body["experienceDistribution"]} == {"mid": 2, "senior": 1}

"""Job/candidate compatibility scoring.

Every function here is pure: it reads plain records and never touches the
database, so it can be called once per request without coordination.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

EXPERIENCE_LEVELS: tuple[str, ...] = ("entry", "mid", "senior", "executive")
_TRUE_STRINGS = frozenset({"true", "1", "yes"})

SKILLS_WEIGHT = 0.5
EXPERIENCE_WEIGHT = 0.3
LOCATION_WEIGHT = 0.2

T = TypeVar("T")


@dataclass(frozen=True)
class JobProfile:
    skills: list[str] = field(default_factory=list)
    experience: str = ""
    location: str = ""
    remote: bool = False

    @classmethod
    def from_record(cls, record: Any) -> JobProfile:
        if isinstance(record, JobProfile):
            return record
        return cls(
            skills=_skills_of(record),
            experience=_text_of(record, "experience"),
            location=_text_of(record, "location"),
            remote=_flag_of(record, "remote"),
        )


@dataclass(frozen=True)
class CandidateProfile:
    skills: list[str] = field(default_factory=list)
    experience: str = ""
    location: str = ""

    @classmethod
    def from_record(cls, record: Any) -> CandidateProfile:
        if isinstance(record, CandidateProfile):
            return record
        return cls(
            skills=_skills_of(record),
            experience=_text_of(record, "experience"),
            location=_text_of(record, "location"),
        )


@dataclass(frozen=True)
class MatchResult:
    overall_score: int
    skills_match: float
    experience_match: int
    location_match: int

    def breakdown(self) -> dict[str, float | int]:
        return {
            "skillsMatch": self.skills_match,
            "experienceMatch": self.experience_match,
            "locationMatch": self.location_match,
            "overallScore": self.overall_score,
        }


def skills_match(job: Any, candidate: Any) -> float:
    job_skills = JobProfile.from_record(job).skills
    if not job_skills:
        return 0.0

    candidate_skills = set(CandidateProfile.from_record(candidate).skills)
    common = [skill for skill in job_skills if skill in candidate_skills]
    return len(common) / len(job_skills) * 100


def experience_match(job_level: Any, candidate_level: Any) -> int:
    # Unknown or unset levels sit at -1 and go through the same arithmetic.
    distance = _level_index(candidate_level) - _level_index(job_level)
    if distance >= 0:
        return 100
    if distance == -1:
        return 75
    if distance == -2:
        return 50
    return 25


def location_match(job: Any, candidate: Any) -> int:
    job_profile = JobProfile.from_record(job)
    if job_profile.remote:
        return 100

    candidate_location = CandidateProfile.from_record(candidate).location.lower()
    job_location = job_profile.location.lower()
    if not candidate_location or not job_location:
        return 0

    if job_location in candidate_location or candidate_location in job_location:
        return 100
    if "remote" in candidate_location or "remote" in job_location:
        return 80
    return 0


def overall_score(job: Any, candidate: Any) -> MatchResult:
    job_profile = JobProfile.from_record(job)
    candidate_profile = CandidateProfile.from_record(candidate)

    skills = skills_match(job_profile, candidate_profile)
    experience = experience_match(job_profile.experience, candidate_profile.experience)
    location = location_match(job_profile, candidate_profile)

    weighted = (skills * SKILLS_WEIGHT) + (experience * EXPERIENCE_WEIGHT) + (location * LOCATION_WEIGHT)
    return MatchResult(
        overall_score=_clamp(_round_half_up(weighted), 0, 100),
        skills_match=skills,
        experience_match=experience,
        location_match=location,
    )


def recommend(jobs: Iterable[T], candidate: Any, limit: int) -> list[tuple[T, MatchResult]]:
    """Score ``jobs`` against ``candidate`` and return the best ``limit`` of them.

    Sorting is stable, so jobs with equal scores keep their input order.
    """
    if limit <= 0:
        return []

    candidate_profile = CandidateProfile.from_record(candidate)
    scored = [(job, overall_score(job, candidate_profile)) for job in jobs]
    scored.sort(key=lambda item: item[1].overall_score, reverse=True)
    return scored[:limit]


def suitable_levels(candidate_level: Any) -> Sequence[str]:
    """Levels at or below the candidate's; empty for an unknown level."""
    return EXPERIENCE_LEVELS[: _level_index(candidate_level) + 1]


def _level_index(level: Any) -> int:
    try:
        return EXPERIENCE_LEVELS.index(level)
    except ValueError:
        return -1


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _field(record: Any, name: str) -> Any:
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _text_of(record: Any, name: str) -> str:
    value = _field(record, name)
    return value if isinstance(value, str) else ""


def _skills_of(record: Any) -> list[str]:
    value = _field(record, "skills")
    if not value or isinstance(value, (str, bytes)):
        return []
    try:
        return [skill for skill in value if isinstance(skill, str)]
    except TypeError:
        return []


def _flag_of(record: Any, name: str) -> bool:
    # Real booleans, or an explicit truthy string. "false" is not remote.
    value = _field(record, name)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False

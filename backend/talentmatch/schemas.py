from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthOut(BaseModel):
    status: str = "ok"


class MatchScoreIn(CamelModel):
    job_id: str


class MatchBreakdownOut(CamelModel):
    skills_match: float
    experience_match: int
    location_match: int
    overall_score: int


class MatchScoreOut(CamelModel):
    match_score: int
    breakdown: MatchBreakdownOut


class EmployerOut(CamelModel):
    id: str
    name: str
    company: str | None = None


class JobOut(CamelModel):
    id: str
    title: str
    description: str
    company: str
    location: str
    remote: bool
    type: str
    experience: str
    skills: list[str] = Field(default_factory=list)
    status: str
    views: int = 0
    applications_count: int = 0
    expires_at: datetime
    created_at: datetime
    employer: EmployerOut | None = None


class RecommendedJobOut(JobOut):
    match_score: int


class UserProfileOut(CamelModel):
    skills: list[str] = Field(default_factory=list)
    experience: str | None = None
    location: str | None = None


class RecommendationsOut(CamelModel):
    recommendations: list[RecommendedJobOut] = Field(default_factory=list)
    user_profile: UserProfileOut


class ExtractSkillsIn(CamelModel):
    text: str | None = None


class ExtractSkillsOut(CamelModel):
    skills: list[str] = Field(default_factory=list)
    confidence: float


class ResumeSkillsOut(ExtractSkillsOut):
    file_name: str


class SkillSuggestionsIn(CamelModel):
    partial_skill: str | None = None


class SkillSuggestionsOut(CamelModel):
    suggestions: list[str] = Field(default_factory=list)


class AnalyzeJobIn(CamelModel):
    description: str | None = None


class JobAnalysisOut(CamelModel):
    key_phrases: list[str] = Field(default_factory=list)
    requirements: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    complexity_score: int = 0
    word_count: int = 0


class SkillCountOut(CamelModel):
    skill: str
    count: int


class DistributionOut(CamelModel):
    id: str | None = Field(default=None, alias="_id")
    count: int


class MarketTrendsOut(CamelModel):
    popular_skills: list[SkillCountOut] = Field(default_factory=list)
    job_type_distribution: list[DistributionOut] = Field(default_factory=list)
    experience_distribution: list[DistributionOut] = Field(default_factory=list)
    total_active_jobs: int = 0


class ApplyIn(CamelModel):
    cover_letter: str | None = Field(default=None, max_length=1000)
    resume: str | None = None


class ApplyOut(CamelModel):
    message: str
    match_score: int

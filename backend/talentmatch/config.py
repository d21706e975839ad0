from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "TalentMatch Marketplace API"
    app_env: str = "dev"

    database_url: str = Field(default="sqlite:///./talentmatch.db")
    cors_origins: list[str] = Field(default_factory=lambda: [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ])

    log_level: str = "INFO"
    log_dir: str | None = None

    # Empty means the built-in technology dictionary.
    skill_catalog: list[str] = Field(default_factory=list)
    max_skills_extracted: int = 10
    max_skill_suggestions: int = 10
    max_resume_bytes: int = 5 * 1024 * 1024
    spacy_model: str = "en_core_web_sm"

    recommendation_limit: int = 10
    job_lifetime_days: int = 30


settings = Settings()

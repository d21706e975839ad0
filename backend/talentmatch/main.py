from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from talentmatch.config import settings
from talentmatch.db import init_db
from talentmatch.logger import configure_logging, get_logger, is_configured
from talentmatch.routers import ai, health, jobs


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not is_configured():
        configure_logging(settings.log_level, settings.log_dir)
    init_db()
    get_logger(__name__).info(f"{settings.app_name} started ({settings.app_env})")

    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(ai.router, prefix="/api")
app.include_router(jobs.router, prefix="/api")

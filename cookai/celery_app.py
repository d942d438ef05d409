"""Celery app for background recipe generation."""

import math

from celery import Celery

from cookai.config import get_settings

settings = get_settings()

# A generation is one LLM call plus a short write, so give it a minute of headroom
GENERATION_SOFT_LIMIT = math.ceil(settings.llm_timeout_seconds) + 30
GENERATION_HARD_LIMIT = GENERATION_SOFT_LIMIT + 30

app = Celery("cookai", broker=settings.redis_url, backend=settings.redis_url)
app.conf.include = ["cookai.tasks.recipe_generation"]

app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    enable_utc=True,
    timezone="UTC",
    task_track_started=True,
    task_soft_time_limit=GENERATION_SOFT_LIMIT,
    task_time_limit=GENERATION_HARD_LIMIT,
    result_expires=24 * 60 * 60,
)

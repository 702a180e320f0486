from contextlib import asynccontextmanager
import logging

from resume_studio.ai.config import load_ai_config
from resume_studio.core.applications_store import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    init_db()
    cfg = load_ai_config()
    logger.info(
        "ai_config provider=%s candidates=%s default_model=%s",
        cfg.provider,
        ",".join(cfg.candidates),
        cfg.default_model,
    )
    yield

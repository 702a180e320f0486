import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from resume_studio.api.v1.health import router as health_router
from resume_studio.api.v1.resume import router as resume_router
from resume_studio.api.v1.job import router as job_router
from resume_studio.api.v1.interview import router as interview_router
from resume_studio.api.v1.applications import router as applications_router
from resume_studio.core.cors import cors_allowed_origins
from resume_studio.core.errors import register_exception_handlers
from resume_studio.core.rate_limit import limiter
from resume_studio.core.config import settings
from dotenv import load_dotenv
from resume_studio.core.lifespan import lifespan

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Resume Studio API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
register_exception_handlers(app)

app.include_router(health_router, prefix="/api", tags=["Health"])
app.include_router(resume_router, prefix="/api", tags=["Resume"])
app.include_router(job_router, prefix="/api", tags=["Job"])
app.include_router(interview_router, prefix="/api", tags=["Interview"])
app.include_router(applications_router, prefix="/api", tags=["Applications"])


@app.get("/", include_in_schema=False)
async def root():
    return {"message": "AI Powered Resume API is running..."}

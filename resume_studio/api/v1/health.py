from fastapi import APIRouter

from resume_studio.ai.config import load_ai_config
from resume_studio.ai.factory import get_active_model

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    cfg = load_ai_config()
    return {"status": "healthy", "provider": cfg.provider, "activeModel": get_active_model().current}

from fastapi import APIRouter
from app.api.v1.endpoints import health, coach, goals, locale, achievements, onboarding

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(coach.router, prefix="/coach", tags=["coach"])
api_router.include_router(goals.router, prefix="/goals", tags=["goals"])
api_router.include_router(locale.router, prefix="/locale", tags=["locale"])
api_router.include_router(achievements.router, prefix="/achievements", tags=["achievements"])
api_router.include_router(onboarding.router, prefix="/onboarding", tags=["onboarding"])

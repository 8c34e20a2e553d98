# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1 import (
    admin,
    analytics,
    auth,
    certificates,
    portfolio,
    profile,
    projects,
    review,
)

api_router = APIRouter()

api_router.include_router(auth.router,         prefix="/auth",         tags=["auth"])
api_router.include_router(profile.router,      prefix="/me",           tags=["profile"])
api_router.include_router(certificates.router, prefix="/certificates", tags=["certificates"])
api_router.include_router(projects.router,     prefix="/projects",     tags=["projects"])
api_router.include_router(review.router,       prefix="/review",       tags=["review"])
api_router.include_router(admin.router,        prefix="/admin",        tags=["admin"])
api_router.include_router(analytics.router,    prefix="/analytics",    tags=["analytics"])
# público (escopo resolvido pelo role gate)
api_router.include_router(portfolio.router,    prefix="/portfolio",    tags=["portfolio"])

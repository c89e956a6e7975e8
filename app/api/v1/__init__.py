"""
API v1 routes aggregation
"""
from fastapi import APIRouter
from app.api.v1 import users, social, groups, notifications, settings

api_router = APIRouter()

# Users
api_router.include_router(users.router, prefix="/users", tags=["users"])

# Social graph
api_router.include_router(social.router, tags=["social"])

# Groups
api_router.include_router(groups.router, tags=["groups"])

# Notifications
api_router.include_router(notifications.router, tags=["notifications"])

# Settings
api_router.include_router(settings.router, tags=["settings"])

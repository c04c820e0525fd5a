from fastapi import APIRouter
from vpnportal.api.endpoints import announcements, applications, auth, platforms, stats, tutorials, uploads

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router, tags=["Auth"])
api_router.include_router(platforms.router, tags=["Platforms"])
api_router.include_router(applications.router, tags=["Applications"])
api_router.include_router(tutorials.router, tags=["Tutorials"])
api_router.include_router(announcements.router, tags=["Announcements"])
api_router.include_router(uploads.router, tags=["Uploads"])
api_router.include_router(stats.router, tags=["Dashboard"])

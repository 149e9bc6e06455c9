from fastapi import APIRouter
from app.api.routers import auth, work_items

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(work_items.router, prefix="/projects", tags=["work-items"])

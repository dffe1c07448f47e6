from fastapi import APIRouter
from groupsplit.api.v1.endpoints import stats

api_router = APIRouter()

api_router.include_router(stats.router, prefix="/stats", tags=["stats"])

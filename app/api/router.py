"""API router: include all route modules, GET /."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.api import auth, favorites, search

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(search.router)
api_router.include_router(favorites.router)


@api_router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def root():
    """Liveness probe."""
    return "Hola mundo"

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.endpoints import auth as auth_endpoints
from app.api.endpoints import player as player_endpoints
from app.api.endpoints import public as public_endpoints
from app.api.endpoints import users as user_endpoints
from app.api.endpoints import teams as team_endpoints
from app.api.endpoints import tournaments as tournament_endpoints
from app.api.endpoints import matches as match_endpoints
from app.core.config import settings
from app.core.errors import AppError
from app.models import create_tables

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    logger.info("Database tables ready")
    yield


app = FastAPI(title="Five-a-side Tournament API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code},
        headers=exc.headers,
    )


# Include routers
app.include_router(auth_endpoints.router, prefix="/auth", tags=["Authentication"])
app.include_router(public_endpoints.router, prefix="/public", tags=["Public"])
app.include_router(player_endpoints.router, prefix="/player", tags=["Player"])
app.include_router(user_endpoints.router, prefix="/admin", tags=["Admin: Players"])
app.include_router(team_endpoints.router, prefix="/admin", tags=["Admin: Teams"])
app.include_router(tournament_endpoints.router, prefix="/admin", tags=["Admin: Tournaments"])
app.include_router(match_endpoints.router, prefix="/admin", tags=["Admin: Matches"])


@app.get("/health")
async def health():
    return {"status": "ok"}

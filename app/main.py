import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core import config
from app.core.exceptions import SkillSwapError
from app.core.logging_config import setup_logging
from app.api.routes import users, profiles, languages, matches, messages
from app.db.database import Base, engine

# Import all models so every table is registered before create_all
from app.models.user import User  # noqa: F401
from app.models.profile import Profile  # noqa: F401
from app.models.user_language import UserLanguage  # noqa: F401
from app.models.match import Match  # noqa: F401
from app.models.message import Message  # noqa: F401

setup_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables if they don't exist
    Base.metadata.create_all(bind=engine)
    yield


# Initialize FastAPI app
app = FastAPI(
    title=config.APP_TITLE,
    description="API for a peer skill-matching application",
    version=config.APP_VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(users.router)
app.include_router(profiles.router)
app.include_router(languages.router)
app.include_router(matches.router)
app.include_router(messages.router)


@app.exception_handler(SkillSwapError)
async def skillswap_error_handler(request: Request, exc: SkillSwapError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/")
def read_root():
    return {"message": "Welcome to SkillSwap API"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}

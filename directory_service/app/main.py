# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, engine
from shared.helpers.exception_handler import setup_exception_handlers
from . import models  # registers every table on Base
from .router import (
    businesses_router, featured_requests_router, ownership_claims_router, social_media_router
)
from .router.admin import businesses_router as admin_businesses_router
from .router.admin import ownership_claims_router as admin_ownership_claims_router
from .router.admin import social_media_router as admin_social_media_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title="Business Directory API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Public and owner routes
app.include_router(businesses_router.router)
app.include_router(ownership_claims_router.router)
app.include_router(featured_requests_router.router)
app.include_router(social_media_router.router)

# Admin routes
app.include_router(admin_businesses_router.router)
app.include_router(admin_ownership_claims_router.router)
app.include_router(admin_social_media_router.router)


@app.get("/api/health")
def health():
    return {"status": "healthy"}

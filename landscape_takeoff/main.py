from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import takeoff

logger = logging.getLogger("landscape_takeoff")
logger.setLevel(settings.LOG_LEVEL.upper())

app = FastAPI(
    title=settings.APP_NAME,
    description="Quantity takeoff for small landscaping jobs",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(takeoff.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "landscape-takeoff"}

"""Main FastAPI application with hexagonal architecture."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from caster.config import stats_api_config_from_env

from . import __version__
from .api.rest.routes import router as caster_router

# Load environment variables
load_dotenv()

logging.basicConfig(level=logging.INFO)

app = FastAPI(
    title="Caster Insights API",
    description="Pre-match broadcast analytics for esports matchups",
    version=__version__,
)

# CORS configuration for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",  # Alternative dev port
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    stats_api_enabled: bool


@app.get("/", tags=["meta"])
async def root():
    """API root with information and available endpoints."""
    return {
        "name": "Caster Insights API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "health": "GET /health",
            "report": "POST /api/caster/report",
            "insights": "POST /api/caster/insights",
        },
    }


@app.get("/health", response_model=HealthResponse, tags=["meta"])
async def health_check():
    """Check API health and configuration status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        stats_api_enabled=stats_api_config_from_env().enabled,
    )


app.include_router(caster_router)

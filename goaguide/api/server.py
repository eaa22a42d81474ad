"""
api/server.py
-------------
FastAPI application entry point.

Run dev server:
    uvicorn goaguide.api.server:app --reload --port 8000

Endpoints:
    GET  /v1/health
    POST /v1/itinerary/optimize
"""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from goaguide import __version__
from goaguide.api.routes import health, itinerary

app = FastAPI(
    title="GoaGuide Itinerary Scheduler API",
    version=__version__,
    description=(
        "Budget-constrained, weather-aware day-wise itinerary scheduler. "
        "Integrates OpenWeatherMap, Google Routes and Gemini day tips."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# Allow the web frontend (any origin during development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router,    prefix="/v1",           tags=["Health"])
app.include_router(itinerary.router, prefix="/v1/itinerary", tags=["Itinerary"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("goaguide.api.server:app", host="0.0.0.0", port=8000, reload=True)

"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mortgage_analyzer.api.routes import analysis, comparison
from mortgage_analyzer.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Mortgage Analyzer",
    description="Amortization schedules and pay-debt-vs-invest projections",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis.router)
app.include_router(comparison.router)


@app.get("/health")
async def health():
    return {"status": "ok"}

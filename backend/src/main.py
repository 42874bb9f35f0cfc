"""Field Criteria Service - Main Application"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.criteria import router as criteria_router
from src.common.config import settings

logging.basicConfig(
    level=settings.app.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title="Field Criteria Service",
    description="Typed field parsing, unit normalization and display",
    version="0.1.0",
    debug=settings.app.debug
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(criteria_router)

@app.get("/")
async def root():
    return {"message": settings.app.name, "status": "running"}

@app.get("/health")
async def health():
    return {"status": "healthy"}

"""Aggregate API router for the FastAPI application."""

from fastapi import APIRouter

from app.api.routes import patents, pipeline, reports

api_router = APIRouter()
api_router.include_router(patents.router)
api_router.include_router(reports.router)
api_router.include_router(pipeline.router)

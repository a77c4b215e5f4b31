"""Liveness endpoints."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from feedback_proxy.dependencies import get_provider_status
from feedback_proxy.response_models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def root():
    return "Interview feedback proxy is running. Use /health to verify."


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Reports liveness and which operations answer with mock payloads."""
    return HealthResponse(status="ok", **get_provider_status())

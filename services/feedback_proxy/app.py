"""FastAPI application factory."""

from fastapi import FastAPI

from feedback_proxy.routes import feedback_router, health_router, transcription_router


def create_app() -> FastAPI:
    """Builds the proxy application with all routers mounted."""
    app = FastAPI(title="Interview Feedback Proxy")
    app.include_router(health_router)
    app.include_router(transcription_router)
    app.include_router(feedback_router)
    return app

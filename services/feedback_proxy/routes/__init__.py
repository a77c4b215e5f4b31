from .feedback import router as feedback_router
from .health import router as health_router
from .transcription import router as transcription_router

__all__ = ["feedback_router", "health_router", "transcription_router"]

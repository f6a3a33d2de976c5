from .drone import router as drone_router
from .media import router as media_router

__all__ = ['drone_router', 'media_router']
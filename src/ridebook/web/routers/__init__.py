from ridebook.web.routers.counters import router as counters_router
from ridebook.web.routers.identifiers import router as identifiers_router

__all__ = [
    "counters_router",
    "identifiers_router",
]

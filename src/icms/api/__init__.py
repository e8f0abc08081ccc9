from .v1 import api_router as v1_router
from .v2 import api_router as v2_router

__all__ = ["v1_router", "v2_router"]

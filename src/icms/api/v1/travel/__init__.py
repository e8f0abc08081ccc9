from fastapi import APIRouter

from . import requests
from .components import COMPONENTS, component_router, hotel_rooms_router

router = APIRouter()
router.include_router(requests.router, prefix="/requests")
router.include_router(hotel_rooms_router, prefix="/hotels")
for path, component in COMPONENTS.items():
    router.include_router(component_router(component), prefix=f"/{path}")

# app/routes/__init__.py
from fastapi import APIRouter
from app.routes.itineraries import itinerary_routes, library_routes
from app.routes.places import place_routes


api_router = APIRouter(prefix="/api")

# Itinerary routes
api_router.include_router(itinerary_routes.router)
api_router.include_router(library_routes.router)

# Place lookup routes
api_router.include_router(place_routes.router)

"""Agregador de routers de la API."""
from fastapi import APIRouter
from app.api.routers import bookings, health

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(bookings.router)

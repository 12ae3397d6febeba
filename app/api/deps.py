"""
Dependencias reutilizables para routers (FastAPI Depends).

- Mantener esta capa delgada: sin lógica de negocio.
"""
from fastapi import Request

from app.services.booking_service import BookingController


def get_controller(request: Request) -> BookingController:
    """Controlador único de la app (creado en `app.main.create_app`)."""
    return request.app.state.booking_controller

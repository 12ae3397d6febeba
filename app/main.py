"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers)."""
from typing import Optional
from fastapi import FastAPI
from app.core.config import settings
from app.infrastructure.db.mongo import init_mongo, close_mongo, db_ready
from app.infrastructure.db.bootstrap import ensure_collections
from app.api.router import api_router
from app.core.logging import setup_logging
from app.core.middleware import add_middlewares
from app.core.exceptions import register_exception_handlers
from app.services.booking_service import BookingController
import logging

_log = logging.getLogger("agenda.startup")


def build_controller() -> BookingController:
    return BookingController(
        window_start=settings.booking_window_start,
        window_end=settings.booking_window_end,
        mobile_breakpoint=settings.mobile_breakpoint_px,
        locale=settings.calendar_locale,
    )


def create_app(controller: Optional[BookingController] = None, connect_db: bool = True) -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title=settings.app_name)

    add_middlewares(app)
    register_exception_handlers(app)

    # Un controlador por aplicación, compartido por todas las rutas
    app.state.booking_controller = controller or build_controller()

    if connect_db:
        @app.on_event("startup")
        def on_startup():
            init_mongo()
            if db_ready():
                ensure_collections()
            else:
                _log.warning("Mongo no listo; omitiendo ensure_collections()")

        @app.on_event("shutdown")
        def on_shutdown():
            close_mongo()

    # Monta routers bajo el prefijo configurado
    app.include_router(api_router, prefix=settings.api_prefix_normalized)
    return app


app = create_app()

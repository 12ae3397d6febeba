"""
Configuración de logging para la aplicación e integración con Uvicorn.
"""
import logging


def setup_logging(level: str = "INFO") -> None:
    resolved = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(resolved)
    # pymongo es muy verboso en DEBUG (heartbeats, selección de servidor)
    logging.getLogger("pymongo").setLevel(max(resolved, logging.INFO))

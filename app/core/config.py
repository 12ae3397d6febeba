"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, CORS, Mongo, Agenda (ventana/calendario), Logging.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from pathlib import Path

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Conjunto de variables de configuración con valores por defecto razonables.

    Nota: los valores pueden sobreescribirse vía variables de entorno (.env).
    """
    # App
    app_name: str = "Agenda de Turmas API"
    api_prefix: str = "/api"
    log_level: str = Field(
        "INFO",
        validation_alias=AliasChoices("AGENDA_LOG_LEVEL", "LOG_LEVEL"),
    )

    # CORS (front estático servido aparte)
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    cors_allow_any: bool = False  # Permite todos los orígenes (usa con cuidado)

    # Mongo
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "agenda_db"
    mongo_tls: bool = False  # SRV siempre usa TLS; esto aplica a URIs mongodb://
    # TLS relax options (dev only)
    mongo_tls_insecure: bool = False
    mongo_tls_allow_invalid_hostnames: bool = False
    mongo_timeout_ms: int = 15000

    # Agenda
    bookings_collection: str = "booking"
    booking_window_start: str = Field(
        "07:00",
        validation_alias=AliasChoices("AGENDA_WINDOW_START", "BOOKING_WINDOW_START"),
    )
    booking_window_end: str = Field(
        "18:00",
        validation_alias=AliasChoices("AGENDA_WINDOW_END", "BOOKING_WINDOW_END"),
    )

    # Calendario (vista grid vs lista)
    mobile_breakpoint_px: int = 768
    calendar_locale: str = "pt-br"

    # --- Utilidades derivadas / helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final (excepto cuando es solo '/')
        - Si está vacío, devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
    )


settings = Settings()

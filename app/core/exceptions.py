"""
Errores de dominio de la agenda y handlers globales para respuestas consistentes.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class BookingError(Exception):
    """Base de los errores de agendamiento; `kind` viaja en el cuerpo de la respuesta."""

    kind = "BookingError"
    status_code = 400
    default_message = "Erro no agendamento."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class BookingValidationError(BookingError):
    """Violación fatal: la solicitud se aborta y no se envía nada al store."""

    status_code = 422


class MissingField(BookingValidationError):
    kind = "MissingField"
    default_message = "Preencha todos os campos."

    def __init__(self, fields: Optional[List[str]] = None, message: Optional[str] = None) -> None:
        self.fields = list(fields or [])
        super().__init__(message)

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        body["fields"] = self.fields
        return body


class InvalidInterval(BookingValidationError):
    kind = "InvalidInterval"
    default_message = "O horário de fim deve ser posterior ao horário de início."


class OutsideAllowedWindow(BookingValidationError):
    kind = "OutsideAllowedWindow"

    def __init__(self, window_start: str = "07:00", window_end: str = "18:00") -> None:
        self.window_start = window_start
        self.window_end = window_end
        super().__init__(f"Horário fora do período permitido ({window_start} às {window_end}).")


class WeekendNotAllowed(BookingValidationError):
    kind = "WeekendNotAllowed"
    default_message = "Não é permitido agendar aos finais de semana."


class OverlapDetected(BookingError):
    """Aviso no fatal: requiere confirmación explícita para continuar."""

    kind = "OverlapDetected"
    status_code = 409
    default_message = "Já existe um agendamento conflitando nesse horário. Deseja prosseguir?"

    def __init__(self, conflicts: Optional[List[Dict[str, Any]]] = None) -> None:
        self.conflicts = list(conflicts or [])
        super().__init__()

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        body["conflicts"] = self.conflicts
        body["requires_confirmation"] = True
        return body


class StoreError(BookingError):
    """Falla del store externo; el mensaje subyacente se expone tal cual."""

    status_code = 502


class StoreReadFailure(StoreError):
    kind = "StoreReadFailure"
    default_message = "Erro ao carregar agendamentos."


class StoreWriteFailure(StoreError):
    kind = "StoreWriteFailure"
    default_message = "Erro ao salvar."


class BookingNotFound(BookingError):
    kind = "BookingNotFound"
    status_code = 404
    default_message = "Agendamento não encontrado."


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("agenda.errors")

    @app.exception_handler(BookingError)
    async def _booking_exc_handler(request: Request, exc: BookingError):
        body = exc.to_body()
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        if isinstance(exc, StoreError):
            log.error("Store failure kind=%s message=%s request_id=%s", exc.kind, exc.message, rid)
        else:
            log.info("Booking rejected kind=%s request_id=%s", exc.kind, rid)
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        body: Dict[str, Any] = {"message": exc.detail or "HTTP error"}
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        body: Dict[str, Any] = {"message": "Validation error", "errors": jsonable_errors(exc)}
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=422, content=body)

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        rid = _req_id(request)
        log.exception("Unhandled error request_id=%s", rid)
        body: Dict[str, Any] = {"message": "Internal server error"}
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=500, content=body)


def jsonable_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    # `ctx` puede traer la excepción original (no serializable)
    out: List[Dict[str, Any]] = []
    for err in exc.errors():
        item = {k: v for k, v in err.items() if k != "ctx"}
        out.append(item)
    return out

"""Mapping of domain exceptions to HTTP responses"""

import logging
from typing import Dict, Type
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from solar_gateway.api.dependencies import get_request_id
from solar_gateway.domain.exceptions import ConflictError, DomainException, NotFoundError, ValidationError

# Most specific class wins (InvalidOptionError resolves through ValidationError)
ERROR_STATUS_CODES: Dict[Type[DomainException], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
}


def status_code_for(exc: DomainException) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_code_for(exc)
    level = logging.ERROR if status_code >= 500 else logging.WARNING
    logging.log(
        level,
        f"{type(exc).__name__}: {exc}",
        extra={"request_id": get_request_id(request), "status": status_code},
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are reported like any other ValidationError"""
    logging.warning("Invalid request body", extra={"request_id": get_request_id(request)})
    return JSONResponse(status_code=400, content={"detail": jsonable_errors(exc)})


def jsonable_errors(exc: RequestValidationError) -> list:
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()]


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from agrogestion.core.exceptions import AgroGestionError

logger = logging.getLogger("agrogestion")


def register_error_handlers(app: FastAPI):
    @app.exception_handler(AgroGestionError)
    async def business_exception_handler(request: Request, exc: AgroGestionError):
        logger.warning("Error de negocio %s en %s - %s", exc.code, request.url, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "code": exc.code},
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.error("Error HTTP %s en %s - %s", exc.status_code, request.url, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.error("Error de validación en %s - %s", request.url, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors()},
        )

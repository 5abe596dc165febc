import logging
import time

from fastapi import Request

logger = logging.getLogger("agrogestion")

PROCESS_TIME_HEADER = "X-Process-Time"


async def log_requests(request: Request, call_next):
    """
    Registra cada request con su status y duración, y expone la duración en
    milisegundos en el header X-Process-Time.
    """
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.exception("%s %s falló tras %.1f ms", request.method, request.url.path, elapsed_ms)
        raise

    elapsed_ms = (time.perf_counter() - start) * 1000
    response.headers[PROCESS_TIME_HEADER] = f"{elapsed_ms:.1f}"

    level = logging.WARNING if response.status_code >= 400 else logging.INFO
    logger.log(level, "%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response

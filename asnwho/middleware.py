import logging
import time

from fastapi import Request, Response

logger = logging.getLogger("asnwho.access")


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response: Response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    remote_address = request.headers.get("x-forwarded-for") or (
        request.client.host if request.client else None
    )
    logger.info(
        "%s %s %s %d %.1fms",
        remote_address,
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response

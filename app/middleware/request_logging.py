from fastapi import Request
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app")

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        method = request.method
        path = request.url.path
        logger.info(f"Request: {method} {path}")

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        # Lost races surface as 409 and are worth spotting in the access log
        log = logger.warning if response.status_code == 409 else logger.info
        log(f"Response: {method} {path} -> {response.status_code} in {process_time:.4f}s")

        return response

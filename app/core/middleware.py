from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import threading
import time
import logging

from app.config.settings import settings
from app.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

class TokenBucket:
    """Limitador token bucket: `rate` tokens por segundo, hasta `burst` acumulados"""

    def __init__(self, rate: float, burst: int):
        self.rate = rate
        self.burst = burst
        self.tokens = float(burst)
        self.updated_at = time.monotonic()
        self._lock = threading.Lock()

    def allow(self) -> bool:
        with self._lock:
            now = time.monotonic()
            self.tokens = min(self.burst, self.tokens + (now - self.updated_at) * self.rate)
            self.updated_at = now

            if self.tokens < 1:
                return False

            self.tokens -= 1
            return True

def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure properly for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.rate_limiter_enabled:
        limiter = TokenBucket(settings.rate_limit_per_second, settings.rate_limit_burst)
        logger.info(
            f"⏱️ Rate limiter activo: {settings.rate_limit_per_second}/s, "
            f"burst {settings.rate_limit_burst}"
        )

        @app.middleware("http")
        async def rate_limit(request, call_next):
            if not limiter.allow():
                return JSONResponse(
                    status_code=429,
                    content=ErrorResponse(error="rate limit exceeded").model_dump(exclude_none=True)
                )
            return await call_next(request)

    @app.middleware("http")
    async def log_requests(request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response

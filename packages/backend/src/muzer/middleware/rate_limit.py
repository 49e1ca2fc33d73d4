"""Rate limiting middleware: Redis fixed window per IP per minute.

Each IP gets a counter key "muzer:rl:{ip}:{bucket}:{minute}". Token
generation has its own, stricter bucket. Rate limiting is skipped
entirely when Redis is unavailable (e.g. in tests or local dev).
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from muzer.db.redis import get_redis

logger = structlog.get_logger()

TOKEN_PATH = "/api/generate-token"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Redis-based rate limiting per IP per minute."""

    def __init__(self, app, default_rpm: int = 100, token_rpm: int = 20):
        super().__init__(app)
        self.default_rpm = default_rpm
        self.token_rpm = token_rpm

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            redis = get_redis()
        except RuntimeError:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        is_token = request.url.path.rstrip("/") == TOKEN_PATH
        rpm = self.token_rpm if is_token else self.default_rpm
        bucket = "token" if is_token else "api"
        window = int(time.time() // 60)
        key = f"muzer:rl:{client_ip}:{bucket}:{window}"

        try:
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, 120)
        except Exception as e:
            # Redis went away mid-flight: serve the request unthrottled
            logger.warning("rate_limit.redis_error", error=str(e))
            return await call_next(request)

        if count > rpm:
            logger.info("rate_limit.exceeded", client_ip=client_ip, bucket=bucket)
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "message": "Rate limit exceeded. Try again later.",
                },
                headers={"Retry-After": "60"},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(rpm)
        response.headers["X-RateLimit-Remaining"] = str(max(0, rpm - count))
        return response

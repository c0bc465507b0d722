import logging

from fastapi import HTTPException, Request, status
from limits import RateLimitItemPerMinute
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

from config import OTP_RATE_LIMIT, RATE_LIMIT_WINDOW_MINUTES, REPORT_RATE_LIMIT

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Per-client-IP moving window limiter, used as a route dependency.
    Counters live in process memory, so each worker limits independently.
    """

    def __init__(self, scope: str, max_requests: int, window_minutes: int, message: str):
        self.scope = scope
        self.message = message
        self.item = RateLimitItemPerMinute(max_requests, window_minutes)
        self.storage = MemoryStorage()
        self.limiter = MovingWindowRateLimiter(self.storage)

    def __call__(self, request: Request):
        client_ip = request.client.host if request.client else "unknown"
        if not self.limiter.hit(self.item, self.scope, client_ip):
            logger.warning("Rate limit exceeded for %s on %s", client_ip, self.scope)
            raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=self.message)

    def reset(self):
        self.storage.reset()


otp_limiter = RateLimiter(
    scope="otp",
    max_requests=OTP_RATE_LIMIT,
    window_minutes=RATE_LIMIT_WINDOW_MINUTES,
    message="Too many OTP requests from this IP, please try again later.",
)

report_limiter = RateLimiter(
    scope="report",
    max_requests=REPORT_RATE_LIMIT,
    window_minutes=RATE_LIMIT_WINDOW_MINUTES,
    message="Too many reports from this IP, please try again later.",
)

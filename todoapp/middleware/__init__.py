from .correlation import CORRELATION_HEADER, RequestLoggingMiddleware, correlation_id_var
from .exceptions import UnhandledExceptionMiddleware, problem_response, register_exception_handlers
from .rate_limit import FixedWindowRateLimiter, RateLimitMiddleware

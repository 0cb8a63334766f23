"""Engine utilities package: logging and batch rate limiting."""

from boxdstats.etl.utils.logger import setup_logger
from boxdstats.etl.utils.rate_limiter import BatchRateLimiter

__all__ = ["BatchRateLimiter", "setup_logger"]

from .logging_config import get_perf_logger, setup_logger  # noqa: F401

__all__ = ["setup_logger", "get_perf_logger"]

from .logger import setup_logger, LoggerMixin

__all__ = ["setup_logger", "LoggerMixin"]

from .logging_config import LogConfig
from .metrics import MetricsCollector

__all__ = ['LogConfig', 'MetricsCollector']

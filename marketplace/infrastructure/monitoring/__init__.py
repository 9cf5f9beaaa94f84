"""
Monitoring package: Prometheus metrics and health checks.
"""

from .health_checks import HealthChecker
from .metrics import get_metrics, get_metrics_content_type

__all__ = [
    "HealthChecker",
    "get_metrics",
    "get_metrics_content_type",
]

"""
API middleware components.
"""

from api_envelope.api.middleware.correlation import CorrelationIdMiddleware

__all__ = [
    "CorrelationIdMiddleware",
]

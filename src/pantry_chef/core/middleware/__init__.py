"""HTTP middleware."""

from pantry_chef.core.middleware.logging import LoggingMiddleware
from pantry_chef.core.middleware.request_id import RequestIDMiddleware


__all__ = ["LoggingMiddleware", "RequestIDMiddleware"]

"""
API layer - FastAPI routes and HTTP concerns for the case-lifecycle engine.

This layer contains:
- FastAPI route definitions
- Request/Response DTOs
- Actor resolution and capability checks
- RFC 7807 error rendering and request logging middleware

IMPORT RULES:
- CAN import from: application, domain, bootstrap, config
- CANNOT import from: infrastructure directly (observability excepted)
- Adapters are wired in src.bootstrap and injected through dependencies
"""

__all__: list[str] = []

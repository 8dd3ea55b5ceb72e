from .audit_api import audit_router

__all__ = [
    "audit_router",
]

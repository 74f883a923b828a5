"""
argbind_services -- Bind orchestration over the pure engines.

Architecture:
    argbind_services/ may import kernel, engines and config. Nothing in
    kernel/ or engines/ imports from services.
"""

from argbind_services.bind_service import (
    BindService,
    bind,
    bind_report,
    is_valid_instance,
    validate_required,
)

__all__ = [
    "BindService",
    "bind",
    "bind_report",
    "is_valid_instance",
    "validate_required",
]

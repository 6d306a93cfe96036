from .base import AppError, DomainError, InfrastructureError, ValidationError
from .http import error_response, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "ValidationError",
    "error_response",
    "register_error_handler",
]

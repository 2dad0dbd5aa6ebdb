"""
Data Quality Module
"""
from .validators import DataValidator, ValidationResult, create_orders_validator, validate_orders

__all__ = [
    "DataValidator",
    "ValidationResult",
    "create_orders_validator",
    "validate_orders",
]

"""Core models and configuration for the Column Reconciler."""

from app.core.models import BusinessField, ErrorResponse, ValidationReport

__all__ = ["BusinessField", "ValidationReport", "ErrorResponse"]

"""Utility functions for common operations."""

from .service_io import load_service_from_json, save_service_to_json

__all__ = [
    "load_service_from_json",
    "save_service_to_json",
]

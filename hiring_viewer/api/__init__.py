"""API layer for the hiring list endpoint."""

from .items_api import ITEMS_PATH, ItemsAPI

__all__ = ["ItemsAPI", "ITEMS_PATH"]

"""Python client for the OncoManager API."""
from .api import ApiError, OncoManagerClient
from .cache import QueryCache

__all__ = ['ApiError', 'OncoManagerClient', 'QueryCache']

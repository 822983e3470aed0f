"""
jService Client Package

Async client for the jService Jeopardy clue API.

Usage:
    async with JServiceClient() as client:
        categories = await client.fetch_categories(10, offset=-1)
        clues = await client.fetch_clues(categories[0].id)
        batch = await client.fetch_random_clues(5)
"""

from .client import JServiceClient, JServiceError
from .config import ClientConfig, ConfigError, configure_logger, load_config
from .models import Category, Clue
from .result import FetchResult, FetchStatus

__all__ = [
    # Client
    "JServiceClient",
    "JServiceError",
    # Models
    "Category",
    "Clue",
    # Results
    "FetchResult",
    "FetchStatus",
    # Config
    "ClientConfig",
    "ConfigError",
    "configure_logger",
    "load_config",
]

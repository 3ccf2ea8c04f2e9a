"""
RateTheDogs - Anonymous Dog Rating API

This package contains the HTTP API for rating and skipping dogs, the personal
statistics and achievements engine, and the Dog CEO catalog import scripts.
"""

__version__ = "1.0.0"

from .config import settings

__all__ = ["settings", "__version__"]

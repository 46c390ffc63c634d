"""
Provider selection by name.
"""
from config import VARIATION_SOURCE
from .base import BaseVariationProvider


def create_provider(source: str = None) -> BaseVariationProvider:
    """Create the provider for `source` ("http" or "local")."""
    source = source or VARIATION_SOURCE
    if source == "http":
        from variation.providers.http_provider import HttpProvider
        return HttpProvider()
    if source == "local":
        from variation.providers.local_provider import LocalProvider
        return LocalProvider()
    print(f"Unknown variation source: {source}, using local")
    from variation.providers.local_provider import LocalProvider
    return LocalProvider()

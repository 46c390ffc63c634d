"""
Variation providers: where bundle payloads come from.
"""
from variation.providers.base import BaseVariationProvider
from variation.providers.factory import create_provider

__all__ = ["BaseVariationProvider", "create_provider"]

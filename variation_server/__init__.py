"""
Variation Server

A small HTTP daemon that issues variation bundles to the games.

This package is intentionally dependency-light (stdlib http.server) so it can run anywhere
this repo runs.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"

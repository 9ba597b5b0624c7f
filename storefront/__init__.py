"""Storefront product catalog API and detail-view client."""

__version__ = "1.0.0"

"""Storefront catalog API and product detail client."""

__version__ = "0.1.0"

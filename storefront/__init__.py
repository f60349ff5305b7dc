"""Customization storefront API: order pricing, exchange rates and image uploads."""

__version__ = "0.1.0"

"""Shopping cart engine for the restaurant storefront."""

__version__ = "1.0.0"

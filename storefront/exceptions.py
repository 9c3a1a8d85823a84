"""Storefront exceptions"""


class StorefrontError(Exception):
    """Base exception for storefront errors"""
    pass


class CatalogError(StorefrontError):
    """Catalog API could not be used"""
    pass


class CatalogPayloadError(CatalogError):
    """Catalog API answered with a payload that failed validation"""
    pass


class CartStateError(StorefrontError):
    """Persisted cart state could not be read back"""
    pass

"""Shopfront: a small Django storefront."""

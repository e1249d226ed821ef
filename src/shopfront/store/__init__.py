"""Store module for e-commerce functionality.

Provides the shopping cart, checkout, order history and invoices
for catalog products.
"""

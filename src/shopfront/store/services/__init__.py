"""Store services: cart, orders, invoices and payments."""

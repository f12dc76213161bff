"""Sales reconciliation pipeline: clients, products and sales orders."""

__version__ = "0.1.0"

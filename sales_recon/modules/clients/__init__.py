"""Clients module.

Raw source: client reference table (Clientes)
Processes:
- Client index construction → client_index.py
- Last purchase date reconciliation → purchase_dates.py
"""

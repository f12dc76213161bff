"""Sales module.

Raw source: current and historical sales tables (Vendas)
Processes:
- Identity/date correction rules → rules.py
- Client/product join → enrich.py
- Order-level aggregation → orders.py
"""

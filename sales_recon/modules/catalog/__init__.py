"""Product catalog module.

Raw source: product reference table (Produtos)
Output: ProductPackIndex (product code -> units per master pack)
"""

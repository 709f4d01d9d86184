"""
Repositories package.

Exports:
- PriceTable / get_price_table: per-model token limits and costs
"""

from .price_table import PriceTable, get_price_table

__all__ = ["PriceTable", "get_price_table"]

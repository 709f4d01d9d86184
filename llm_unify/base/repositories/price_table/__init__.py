"""Price table package.

Public API:
- PriceTable / get_price_table: snapshot + custom overrides, lookup and costs
- candidate_models: fuzzy lookup variants
"""

from .fallback import candidate_models
from .repository import PriceTable, get_price_table, parse_snapshot

__all__ = ["PriceTable", "get_price_table", "parse_snapshot", "candidate_models"]

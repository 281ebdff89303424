"""Field service report aggregator.

Reads monthly field service spreadsheet exports, groups the activity rows by
person and computes category-exclusive totals.
"""

__version__ = "0.1.0"

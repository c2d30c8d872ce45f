"""Summary-layer aggregation helpers.

This package turns cleaned transfer records into the small per-region and
per-region-per-day tables used by the charts, and optionally exports them as
validated CSV files.
"""

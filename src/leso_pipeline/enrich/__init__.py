"""Reference-data enrichment (region crosswalk & census population).

These modules attach human-readable region names and population figures to
the per-region summary used by the per-capita chart.
"""

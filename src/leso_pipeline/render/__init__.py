"""Static chart rendering.

Loads the state hexgrid, joins it with the enriched summary and writes the
three choropleths and the cumulative time-series chart as PNG files.
"""

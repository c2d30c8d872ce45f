"""leso_pipeline package.

Contains modules for loading the LESO (1033 program) property disposition
workbook, cleaning & validating transfer records, aggregating them per
state/territory, joining census reference data, and rendering static charts.

Architecture:
- Workbook → Clean → Summary layers kept in memory for a single batch run
- Dask is used for partitioned load/clean/aggregate transforms
- Pydantic models validate transfer records and exported summary rows
- GeoPandas + Matplotlib render the hexgrid choropleths and line chart
"""

__all__ = ["__version__"]
__version__ = "0.1.0"

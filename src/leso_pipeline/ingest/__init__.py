"""Ingestion helpers.

Reads the multi-sheet LESO property disposition workbook into a single
partitioned table of raw transfer rows.
"""

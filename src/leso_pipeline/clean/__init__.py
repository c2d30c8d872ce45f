"""Cleaning utilities for the pipeline.

Provides functions to rename workbook columns to canonical field names,
parse ship dates, normalize text and categorical codes, derive the line-item
total value, and audit the result against the `TransferRecord` model.
"""

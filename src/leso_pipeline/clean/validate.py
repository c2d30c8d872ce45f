"""Validation utilities for cleaned transfer records.

This module validates partition data against the Pydantic `TransferRecord`
model. Invalid rows are counted and reported; they are not removed, since the
cleaner has already nulled the fields that could not be parsed.
"""
from __future__ import annotations

import logging
from typing import Any
from typing import cast, Any as TypingAny
import pandas as pd
from pydantic import ValidationError
from dask import delayed, compute  # type: ignore[attr-defined]

from leso_pipeline.models import TransferRecord, to_native_record

log = logging.getLogger(__name__)


def validate_partition(pdf: pd.DataFrame) -> tuple[list[dict[str, Any]], int]:
    """Validate a pandas partition of cleaned records using Pydantic.

    Args:
        pdf: Pandas DataFrame for the partition.

    Returns:
        A tuple of (list_of_validated_records, bad_count).
    """
    good: list[dict[str, Any]] = []
    bad = 0

    for rec in pdf.to_dict(orient="records"):
        rec = to_native_record(rec)
        try:
            m = TransferRecord.model_validate(rec)
            good.append(m.model_dump(mode="python"))
        except ValidationError:
            bad += 1

    return good, bad


def _count_partition(pdf: pd.DataFrame) -> tuple[int, int]:
    good, bad = validate_partition(pdf)
    return len(good), bad


def audit_transfers(ddf: Any) -> tuple[int, int]:
    """Validate every partition and return `(good, bad)` row counts."""
    tasks = [delayed(_count_partition)(part) for part in ddf.to_delayed()]
    results = cast(TypingAny, compute)(*tasks)

    good_total = sum(g for g, _ in results)
    bad_total = sum(b for _, b in results)

    if bad_total:
        log.warning("Transfer audit: %d of %d rows fail validation", bad_total, good_total + bad_total)
    else:
        log.info("Transfer audit: all %d rows valid", good_total)
    return int(good_total), int(bad_total)

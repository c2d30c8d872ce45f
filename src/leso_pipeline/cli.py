"""Command-line interface for orchestrating the pipeline.

Provides subcommands: `run` (load → clean → aggregate → join → render, plus
the CSV export) and `summary` (everything except rendering). Each command is
implemented as a `cmd_*` function that accepts an argparse namespace. There
are no option flags; configuration comes from the environment (see
`leso_pipeline.config`).
"""
from __future__ import annotations

import argparse
import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

import dask
import pandas as pd
from dotenv import load_dotenv

from leso_pipeline.config import Settings, get_settings
from leso_pipeline.errors import PipelineError
from leso_pipeline.logging_config import configure_logging

# LOAD + CLEAN
from leso_pipeline.ingest.load_workbook import read_transfer_workbook
from leso_pipeline.clean.transform import clean_transfers_ddf, report_unexpected_categories
from leso_pipeline.clean.validate import audit_transfers

# AGGREGATE
from leso_pipeline.aggregate.build_summary import region_summary, region_timeseries
from leso_pipeline.aggregate.export_summary import export_summary

# REFERENCE
from leso_pipeline.enrich.census_population import fetch_state_population, population_table
from leso_pipeline.enrich.join_reference import enrich_summary

# RENDER
from leso_pipeline.render.geometry import load_hexgrid
from leso_pipeline.render.report import render_all

log = logging.getLogger(__name__)


@dataclass
class SummaryTables:
    """In-memory results shared by the `run` and `summary` commands."""
    summary: pd.DataFrame
    timeseries: pd.DataFrame


# --------------------------------------------------
# Helpers
# --------------------------------------------------
@contextmanager
def stage(name: str) -> Iterator[None]:
    """Log a stage boundary and tag any `PipelineError` with the stage name."""
    log.info("Stage %s: started", name)
    try:
        yield
    except PipelineError as e:
        if e.stage is None:
            e.stage = name
        raise
    log.info("Stage %s: done", name)


def build_tables(s: Settings) -> SummaryTables:
    """Run load → clean → aggregate → reference join.

    Args:
        s: Pipeline settings.

    Returns:
        Enriched region summary and region time series.
    """
    with stage("load"):
        raw = read_transfer_workbook(s.workbook_path)

    with stage("clean"):
        transfers: Any = clean_transfers_ddf(raw).persist()
        audit_transfers(transfers)
        report_unexpected_categories(transfers.compute())

    with stage("aggregate"):
        summary = region_summary(transfers)
        timeseries = region_timeseries(transfers)
        log.info("Aggregated %d regions, %d time-series points", len(summary), len(timeseries))

    with stage("reference"):
        census = fetch_state_population(s.census_api_key, s.census_year)
        enriched = enrich_summary(summary, population_table(census))

    return SummaryTables(summary=enriched, timeseries=timeseries)


# --------------------------------------------------
# SUMMARY
# --------------------------------------------------
def cmd_summary(_: argparse.Namespace) -> None:
    """Build the summary tables and export them as CSV."""
    s = get_settings()
    tables = build_tables(s)

    with stage("export"):
        export_summary(tables.summary, tables.timeseries, s.output_dir)


# --------------------------------------------------
# RUN
# --------------------------------------------------
def cmd_run(_: argparse.Namespace) -> None:
    """Full pipeline: summary tables, the four charts and the CSV export."""
    s = get_settings()
    tables = build_tables(s)

    with stage("render"):
        hexgrid = load_hexgrid(s.hexgrid_path, s.hexgrid_name_field)
        render_all(tables.summary, tables.timeseries, hexgrid, s.output_dir)

    with stage("export"):
        export_summary(tables.summary, tables.timeseries, s.output_dir)

    log.info("Pipeline completed; outputs in %s", s.output_dir)


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser instance with `run` and `summary`
        subcommands.
    """
    p = argparse.ArgumentParser(prog="leso-pipeline")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("run", help="build tables, render charts and export CSV")
    sub.add_parser("summary", help="build and export the summary tables only")

    return p


def main(argv: list[str] | None = None) -> int:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()
    configure_logging(Path("logs/pipeline.log"))

    args = build_parser().parse_args(argv)
    commands = {"run": cmd_run, "summary": cmd_summary}

    # single-threaded batch run
    with dask.config.set(scheduler="synchronous"):
        try:
            commands[args.cmd](args)
        except PipelineError as e:
            log.error("Pipeline aborted during %s: %s", e.stage or "setup", e)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

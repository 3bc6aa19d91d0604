from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from itertools import islice
from pathlib import Path

from dotenv import load_dotenv

from sheet_locales.config.loader import DEFAULT_CONFIG_PATH, ConfigError, PipelineConfig, load_config
from sheet_locales.ingest.reader import MalformedRecordError
from sheet_locales.logging.init import log_summary, setup_logging
from sheet_locales.services.orchestrator import ProcessingError, run_pipeline, source_rows
from sheet_locales.services.summary import render_summary_line

"""CLI entrypoint.

- Load .env (python-dotenv, override)
- Resolve config path: --config > SHEET_LOCALES_CONFIG > config/locales.yml
- Resolve output directory: --output-dir > SHEET_LOCALES_OUTPUT_DIR > config
- Run the conversion, print the SUMMARY line and return the exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

ENV_CONFIG = "SHEET_LOCALES_CONFIG"
ENV_OUTPUT_DIR = "SHEET_LOCALES_OUTPUT_DIR"

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; failures only produce a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="sheet-locales",
        description="Translation spreadsheet -> per-locale translation.json files",
    )
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--output-dir", type=Path, default=None, help="Override output_directory from config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print column mapping & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(cfg: PipelineConfig) -> int:
    mapping = ", ".join(f"{pos}={loc}" for pos, loc in cfg.column_mapping)
    print(f"SOURCE: {cfg.source_file} skip_rows={cfg.skip_rows} key_column={cfg.key_column}")
    print(f"  mapping: {mapping}")
    try:
        with source_rows(cfg) as rows:
            for row in islice(rows, INSPECT_SAMPLE_ROWS):
                values = {loc: row.cell(pos) for pos, loc in cfg.column_mapping if row.cell(pos) is not None}
                print(f"  ROW {row.number}: key={row.cell(cfg.key_column)!r} values={values}")
    except (ProcessingError, MalformedRecordError) as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストの cli_main([]) で pytest 引数が混入しないように)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    config_path = args.config or Path(os.getenv(ENV_CONFIG) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    output_dir = args.output_dir or (Path(os.environ[ENV_OUTPUT_DIR]) if os.getenv(ENV_OUTPUT_DIR) else None)
    if output_dir is not None:
        cfg = dataclasses.replace(cfg, output_directory=output_dir)

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(cfg)

    try:
        result = run_pipeline(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL
    except MalformedRecordError as e:
        logger.error(f"malformed record: {e} (no files written)")
        return EXIT_FATAL

    for failed in result.failures:
        logger.error(f"locale={failed.locale} cause={failed.error}")

    # log_summary が "SUMMARY " を付与するので先頭を除く
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_locales > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

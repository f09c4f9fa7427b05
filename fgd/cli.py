from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import (
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_CACHE_META,
    DEFAULT_LOGS,
    DEFAULT_REQUIRED,
    build_request,
    load_config_file,
)
from .report import render_error, write_result
from .types import Verdict
from .verify import run_verification


EXIT_TRUE_GREEN = 0
EXIT_FALSE_GREEN = 2
EXIT_FGD_ERROR = 3


class UsageError(ValueError):
    pass


class _Parser(argparse.ArgumentParser):
    # Usage errors must surface as FGD_ERROR (exit 3), not argparse's exit 2.
    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="fgd",
        description="False-green detector: audit a finished CI job's evidence and classify its green status",
    )
    parser.add_argument("--commit", default=None, help="commit identifier under audit (required)")
    parser.add_argument(
        "--artifacts-dir",
        default=None,
        help=f"root of required artifacts and provenance.json (default: {DEFAULT_ARTIFACTS_DIR})",
    )
    parser.add_argument("--logs", default=None, help=f"CI console log path (default: {DEFAULT_LOGS})")
    parser.add_argument("--cache-meta", default=None, help=f"cache metadata JSON path (default: {DEFAULT_CACHE_META})")
    parser.add_argument("--out", default=None, help="result JSON path (default: <artifacts-dir>/fgd_result.json)")
    parser.add_argument(
        "--required",
        default=None,
        help=f"comma-separated required artifacts relative to --artifacts-dir (default: {DEFAULT_REQUIRED})",
    )
    parser.add_argument("--exit-code", default=None, help="exit code the CI job reported (default: 0)")
    parser.add_argument(
        "--error-pattern",
        default=None,
        help="extra regular expression treated as a failure indicator in the log (checked last)",
    )
    parser.add_argument("--config", default=None, help="YAML file with defaults for the options above (optional)")
    parser.add_argument("--verbose", action="store_true", help="print per-check diagnostics to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    try:
        args = build_parser().parse_args(argv)
        config = load_config_file(Path(args.config)) if str(args.config or "").strip() else None
        req = build_request(
            commit=args.commit,
            artifacts_dir=args.artifacts_dir,
            logs=args.logs,
            cache_meta=args.cache_meta,
            out=args.out,
            required=args.required,
            exit_code=args.exit_code,
            error_pattern=args.error_pattern,
            config=config,
        )
        result = run_verification(req, verbose=bool(args.verbose))
        text = write_result(req.out, result)
    except Exception as e:
        print(render_error(e), file=sys.stderr)
        return EXIT_FGD_ERROR

    print(text)
    if result.verdict == Verdict.TRUE_GREEN:
        return EXIT_TRUE_GREEN
    return EXIT_FALSE_GREEN


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

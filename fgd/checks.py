from __future__ import annotations

from pathlib import Path
from typing import Callable

from .extract import find_bool, find_str
from .junit import parse_junit_tests
from .logscan import compile_indicators, first_match
from .types import AuditState, Signal, VerificationRequest


TEST_REPORT_NAME = "test_report.xml"
PROVENANCE_NAME = "provenance.json"

# A check returns False when its gate kept it from inspecting anything.
Check = Callable[[VerificationRequest, AuditState], bool]


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def check_artifacts(req: VerificationRequest, state: AuditState) -> bool:
    """Stop at the first required artifact that is missing or empty."""
    for rel in req.required:
        p = Path(req.artifacts_dir) / rel
        if not p.exists():
            state.emit(Signal.MISSING_ARTIFACT)
            state.note("missing", rel)
            break
        if p.is_file() and p.stat().st_size == 0:
            state.emit(Signal.MISSING_ARTIFACT)
            state.note("empty", rel)
            break
    return True


def check_test_report(req: VerificationRequest, state: AuditState) -> bool:
    # A broken evidence set makes the report meaningless; skip interpretation.
    if state.has(Signal.MISSING_ARTIFACT):
        return False
    p = Path(req.artifacts_dir) / TEST_REPORT_NAME
    if not p.exists():
        return False
    try:
        tests = parse_junit_tests(p)
    except Exception as e:
        state.emit(Signal.CORRUPT_TEST_REPORT)
        state.note("junit_parse_error", f"{type(e).__name__}: {e}")
        return True
    state.note("junit_tests", tests)
    if tests == 0:
        state.emit(Signal.TESTS_NOT_EXECUTED)
    return True


def check_logs(req: VerificationRequest, state: AuditState) -> bool:
    """Look for failure indicators in the log of a job that claims success."""
    p = Path(req.logs)
    if int(req.exit_code) != 0 or not p.exists():
        return False
    patterns = compile_indicators(req.error_pattern)
    matched = first_match(_read_text(p), patterns)
    if matched is not None:
        state.emit(Signal.IGNORED_ERROR)
        state.note("ignored_error_match", matched)
    return True


def check_cache(req: VerificationRequest, state: AuditState) -> bool:
    p = Path(req.cache_meta)
    if not p.exists():
        return False
    text = _read_text(p)
    hit = find_bool(text, "hit")
    output_valid = find_bool(text, "outputValid")
    state.note("cache_hit", hit)
    state.note("cache_outputValid", output_valid)
    # Only a hit whose output is known-invalid counts; absent fields do not.
    if hit is True and output_valid is False:
        state.emit(Signal.CACHE_SANITY_FAIL)
    return True


def check_provenance(req: VerificationRequest, state: AuditState) -> bool:
    p = Path(req.artifacts_dir) / PROVENANCE_NAME
    if not p.exists():
        return False
    prov_commit = find_str(_read_text(p), "commit")
    state.note("provenance_commit", prov_commit)
    if prov_commit is not None and prov_commit != req.commit:
        state.emit(Signal.PROVENANCE_MISMATCH)
    return True


CHECKS: tuple[tuple[str, Check], ...] = (
    ("artifacts", check_artifacts),
    ("test_report", check_test_report),
    ("logs", check_logs),
    ("cache", check_cache),
    ("provenance", check_provenance),
)

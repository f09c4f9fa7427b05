from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .types import DetailValue, Signal, Verdict, VerificationResult


_SIGNAL_NAMES: dict[Signal, str] = {s: s.value for s in Signal}
_VERDICT_NAMES: dict[Verdict, str] = {v: v.value for v in Verdict}


def _signal_name(sig: Signal) -> str:
    if not isinstance(sig, Signal) or sig not in _SIGNAL_NAMES:
        raise TypeError(f"not a known signal: {sig!r}")
    return _SIGNAL_NAMES[sig]


def _verdict_name(verdict: Verdict) -> str:
    if not isinstance(verdict, Verdict) or verdict not in _VERDICT_NAMES:
        raise TypeError(f"not a known verdict: {verdict!r}")
    return _VERDICT_NAMES[verdict]


def _detail_value(key: str, value: DetailValue) -> DetailValue:
    if value is None or isinstance(value, (str, bool, int)):
        return value
    raise TypeError(f"detail {key!r} must be a scalar, got {type(value).__name__}")


def result_to_dict(result: VerificationResult) -> dict[str, Any]:
    return {
        "verdict": _verdict_name(result.verdict),
        "signals": [_signal_name(s) for s in result.signals],
        "commit": result.commit,
        "details": {k: _detail_value(k, v) for k, v in result.details.items()},
    }


def _dumps(data: dict[str, Any]) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def render_result(result: VerificationResult) -> str:
    """Compact JSON record; identical results always render to identical text."""
    return _dumps(result_to_dict(result))


def render_error(exc: BaseException) -> str:
    return _dumps(
        {
            "verdict": _verdict_name(Verdict.FGD_ERROR),
            "signals": [_verdict_name(Verdict.FGD_ERROR)],
            "error": f"{type(exc).__name__}: {exc}",
        }
    )


def write_result(path: Path, result: VerificationResult) -> str:
    text = render_result(result)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text

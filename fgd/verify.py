from __future__ import annotations

import sys

from .checks import CHECKS
from .types import AuditState, Verdict, VerificationRequest, VerificationResult


def aggregate(state: AuditState, *, commit: str) -> VerificationResult:
    """Finalize accumulated evidence. Any signal at all means a false green."""
    verdict = Verdict.FALSE_GREEN if state.signals else Verdict.TRUE_GREEN
    return VerificationResult(
        verdict=verdict,
        signals=tuple(state.signals),
        commit=commit,
        details=dict(state.details),
    )


def run_verification(req: VerificationRequest, *, verbose: bool = False) -> VerificationResult:
    """Run every check in order against one request and aggregate the verdict.

    Exceptions escaping a check are tool failures and propagate unchanged.
    """
    state = AuditState()
    for name, check in CHECKS:
        n_signals = len(state.signals)
        seen_keys = set(state.details)
        ran = check(req, state)
        if verbose:
            if not ran:
                print(f"INFO: {name}: skipped", file=sys.stderr)
                continue
            new_signals = [s.value for s in state.signals[n_signals:]]
            new_details = {k: v for k, v in state.details.items() if k not in seen_keys}
            status = ",".join(new_signals) or "ok"
            print(f"INFO: {name}: {status} {new_details}", file=sys.stderr)
    return aggregate(state, commit=req.commit)

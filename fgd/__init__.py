"""False-green detector core package.

This package audits the evidence a finished CI job left on disk and decides
whether its passing status can be trusted:
- required artifacts exist and are non-empty
- the JUnit test report parses and shows executed tests
- logs of a "successful" job hide no known failure indicators
- cache metadata and provenance agree with the audited commit
"""

from .types import Signal, Verdict, VerificationRequest, VerificationResult
from .verify import run_verification

__all__ = [
    "Signal",
    "Verdict",
    "VerificationRequest",
    "VerificationResult",
    "run_verification",
]

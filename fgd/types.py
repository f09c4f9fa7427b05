from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union


DetailValue = Union[str, int, bool, None]


class Signal(str, Enum):
    MISSING_ARTIFACT = "MISSING_ARTIFACT"
    CORRUPT_TEST_REPORT = "CORRUPT_TEST_REPORT"
    TESTS_NOT_EXECUTED = "TESTS_NOT_EXECUTED"
    IGNORED_ERROR = "IGNORED_ERROR"
    CACHE_SANITY_FAIL = "CACHE_SANITY_FAIL"
    PROVENANCE_MISMATCH = "PROVENANCE_MISMATCH"


class Verdict(str, Enum):
    TRUE_GREEN = "TRUE_GREEN"
    FALSE_GREEN = "FALSE_GREEN"
    # tool failure, not a statement about the audited job
    FGD_ERROR = "FGD_ERROR"


@dataclass(frozen=True)
class VerificationRequest:
    commit: str
    artifacts_dir: Path
    logs: Path
    cache_meta: Path
    out: Path
    required: tuple[str, ...] = ("test_report.xml", "build_artifact.bin", "provenance.json")
    exit_code: int = 0
    error_pattern: str | None = None


@dataclass
class AuditState:
    """Append-only evidence accumulated by the checks, in execution order."""

    signals: list[Signal] = field(default_factory=list)
    details: dict[str, DetailValue] = field(default_factory=dict)

    def emit(self, signal: Signal) -> None:
        self.signals.append(Signal(signal))

    def note(self, key: str, value: DetailValue) -> None:
        if key in self.details:
            raise KeyError(f"detail already recorded: {key}")
        self.details[key] = value

    def has(self, signal: Signal) -> bool:
        return signal in self.signals


@dataclass(frozen=True)
class VerificationResult:
    verdict: Verdict
    signals: tuple[Signal, ...]
    commit: str
    details: dict[str, DetailValue]

    @property
    def primary_signal(self) -> Signal | None:
        return self.signals[0] if self.signals else None

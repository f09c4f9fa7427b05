from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from .types import VerificationRequest


DEFAULT_ARTIFACTS_DIR = "artifacts"
DEFAULT_LOGS = "logs/ci.log"
DEFAULT_CACHE_META = "cache/metadata.json"
DEFAULT_REQUIRED = "test_report.xml,build_artifact.bin,provenance.json"
RESULT_FILENAME = "fgd_result.json"

_EXIT_CODE_RE = re.compile(r"[+-]?[0-9]+")

CONFIG_KEYS: tuple[str, ...] = (
    "commit",
    "artifacts_dir",
    "logs",
    "cache_meta",
    "out",
    "required",
    "exit_code",
    "error_pattern",
)


def parse_required(raw: str | list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Comma-separated string or list -> trimmed artifact paths, blanks dropped."""
    items = raw.split(",") if isinstance(raw, str) else list(raw)
    return tuple(s for s in (str(x).strip() for x in items) if s)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML mapping of request settings (keys as in `CONFIG_KEYS`)."""
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("Missing dependency: PyYAML. Install with `pip install PyYAML`.") from e

    raw = Path(path).read_text(encoding="utf-8").strip()
    if not raw:
        raise ValueError(f"config file is empty: {path}")
    data = yaml.safe_load(raw)
    if not isinstance(data, dict):
        raise ValueError("config must be a YAML mapping (dict) at the top level")

    unknown = sorted(str(k) for k in data if k not in CONFIG_KEYS)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")

    out: dict[str, Any] = {}
    for key in ("commit", "artifacts_dir", "logs", "cache_meta", "out", "error_pattern"):
        v = data.get(key)
        if v is None:
            continue
        if not isinstance(v, (str, int)) or isinstance(v, bool):
            raise ValueError(f"config field {key} must be a string")
        out[key] = str(v)

    required = data.get("required")
    if required is not None:
        if isinstance(required, list):
            if not all(isinstance(x, str) for x in required):
                raise ValueError("config field required must be a list of strings")
        elif not isinstance(required, str):
            raise ValueError("config field required must be a list or a comma-separated string")
        out["required"] = required

    exit_code = data.get("exit_code")
    if exit_code is not None:
        if isinstance(exit_code, bool) or not isinstance(exit_code, int):
            raise ValueError("config field exit_code must be an integer")
        out["exit_code"] = exit_code
    return out


def build_request(
    *,
    commit: str | None = None,
    artifacts_dir: str | None = None,
    logs: str | None = None,
    cache_meta: str | None = None,
    out: str | None = None,
    required: str | list[str] | None = None,
    exit_code: str | int | None = None,
    error_pattern: str | None = None,
    config: dict[str, Any] | None = None,
) -> VerificationRequest:
    """Merge explicit values over config values over defaults.

    `None` means "not given". Raises ValueError on a missing commit or a
    non-integer exit code.
    """
    cfg = dict(config or {})

    def _pick(value: Any, key: str, default: Any) -> Any:
        if value is not None:
            return value
        if cfg.get(key) is not None:
            return cfg[key]
        return default

    commit_v = str(_pick(commit, "commit", "") or "")
    if not commit_v.strip():
        raise ValueError("Missing required arg: --commit")

    artifacts_v = str(_pick(artifacts_dir, "artifacts_dir", DEFAULT_ARTIFACTS_DIR))
    out_raw = _pick(out, "out", None)
    out_v = Path(str(out_raw)) if out_raw else Path(artifacts_v) / RESULT_FILENAME

    exit_raw = _pick(exit_code, "exit_code", 0)
    # Plain ASCII integers only; int() alone would also take "1_0" or " 1".
    if not _EXIT_CODE_RE.fullmatch(str(exit_raw)):
        raise ValueError(f"--exit-code must be an integer, got {exit_raw!r}")
    exit_v = int(str(exit_raw))

    pattern = _pick(error_pattern, "error_pattern", None)
    if pattern is not None and not str(pattern).strip():
        pattern = None

    return VerificationRequest(
        commit=commit_v,
        artifacts_dir=Path(artifacts_v),
        logs=Path(str(_pick(logs, "logs", DEFAULT_LOGS))),
        cache_meta=Path(str(_pick(cache_meta, "cache_meta", DEFAULT_CACHE_META))),
        out=out_v,
        required=parse_required(_pick(required, "required", DEFAULT_REQUIRED)),
        exit_code=exit_v,
        error_pattern=pattern,
    )

from __future__ import annotations

import importlib.util


def test_fgd_public_surface_is_minimal() -> None:
    import fgd

    assert sorted(fgd.__all__) == [
        "Signal",
        "Verdict",
        "VerificationRequest",
        "VerificationResult",
        "run_verification",
    ]
    assert callable(fgd.run_verification)
    assert [s.value for s in fgd.Signal] == [
        "MISSING_ARTIFACT",
        "CORRUPT_TEST_REPORT",
        "TESTS_NOT_EXECUTED",
        "IGNORED_ERROR",
        "CACHE_SANITY_FAIL",
        "PROVENANCE_MISMATCH",
    ]
    assert {v.value for v in fgd.Verdict} == {"TRUE_GREEN", "FALSE_GREEN", "FGD_ERROR"}


def test_module_entrypoint_exists() -> None:
    assert importlib.util.find_spec("fgd.__main__") is not None

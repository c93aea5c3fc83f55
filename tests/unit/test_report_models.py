"""
Unit tests for raw report models.

Tests ControlResultStatus, ControlResult segments, lenient Control and
Profile construction, and the load_evaluation / load_profile helpers.
"""

from datetime import datetime

import pytest

from overlay_context.exceptions import ReportModelError
from overlay_context.report_models import (
    Control,
    ControlResult,
    ControlResultStatus,
    Evaluation,
    Profile,
    load_evaluation,
    load_profile,
)


# ---------------------------------------------------------------------------
# ControlResultStatus enum
# ---------------------------------------------------------------------------
@pytest.mark.unit
class TestControlResultStatusEnum:
    """Test ControlResultStatus enum values."""

    def test_all_expected_values(self) -> None:
        actual = {s.value for s in ControlResultStatus}
        assert actual == {"passed", "failed", "skipped", "error"}


# ---------------------------------------------------------------------------
# ControlResult
# ---------------------------------------------------------------------------
@pytest.mark.unit
class TestControlResult:
    """Test ControlResult parsing and segment view."""

    def test_minimal_creation(self) -> None:
        r = ControlResult()
        assert r.status is None
        assert r.segments == []

    def test_status_from_string(self) -> None:
        r = ControlResult(status="failed")
        assert r.status == ControlResultStatus.FAILED

    def test_start_time_parsed(self) -> None:
        r = ControlResult(status="passed", start_time="2024-03-01T10:00:00+00:00")
        assert isinstance(r.start_time, datetime)
        assert r.start_time.year == 2024

    def test_segments_skip_empty_parts(self) -> None:
        r = ControlResult(status="failed", code_desc="File /etc/passwd mode", message="expected 0644")
        assert r.segments == ["File /etc/passwd mode", "expected 0644"]

    def test_skip_message_segment(self) -> None:
        r = ControlResult(status="skipped", skip_message="Not applicable on containers")
        assert r.segments == ["Not applicable on containers"]


# ---------------------------------------------------------------------------
# Control / Profile / Evaluation
# ---------------------------------------------------------------------------
@pytest.mark.unit
class TestRawRecords:
    """Test lenient construction of raw records."""

    def test_control_null_code_is_empty(self) -> None:
        c = Control(id="V-1", code=None)
        assert c.code == ""

    def test_control_defaults(self) -> None:
        c = Control(id="V-1")
        assert c.results == []
        assert c.tags == {}
        assert c.impact == 0.0

    def test_control_keeps_unknown_keys(self) -> None:
        c = Control.model_validate({"id": "V-1", "code": "x", "source_location": {"line": 3}})
        assert c.model_extra == {"source_location": {"line": 3}}

    def test_profile_parent_optional(self) -> None:
        p = Profile(name="baseline")
        assert p.parent_profile is None
        assert p.controls == []

    def test_evaluation_nested_parse(self) -> None:
        e = Evaluation.model_validate(
            {
                "profiles": [
                    {"name": "a", "controls": [{"id": "c1", "code": "x", "results": [{"status": "passed"}]}]}
                ]
            }
        )
        assert e.profiles[0].controls[0].results[0].status == ControlResultStatus.PASSED


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------
@pytest.mark.unit
class TestLoaders:
    """Test load_evaluation and load_profile."""

    def test_load_evaluation(self) -> None:
        e = load_evaluation({"version": "5.22.3", "profiles": [{"name": "a"}, {"name": "b", "parent_profile": "a"}]})
        assert [p.name for p in e.profiles] == ["a", "b"]
        assert e.profiles[1].parent_profile == "a"

    def test_load_evaluation_malformed(self) -> None:
        with pytest.raises(ReportModelError) as exc_info:
            load_evaluation({"profiles": [{"controls": [{"code": "x"}]}]})

        err = exc_info.value
        assert err.record_type == "evaluation"
        assert err.error_code == "REPORT_MODEL_ERROR"
        assert any(e.startswith("profiles.0.name") for e in err.errors)
        assert err.cause is not None

    def test_load_profile(self) -> None:
        p = load_profile({"name": "solo", "controls": [{"id": "c1", "code": "describe x"}]})
        assert p.controls[0].code == "describe x"

    def test_load_profile_malformed(self) -> None:
        with pytest.raises(ReportModelError) as exc_info:
            load_profile({"controls": []})
        assert exc_info.value.record_type == "profile"

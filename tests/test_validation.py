"""Tests for action and upload-result validation."""

from dataclasses import replace

from plotgate.validation import validate_action, validate_upload_result


class TestValidateAction:
    def test_complete_click_passes(self, click_action):
        assert validate_action(click_action).passed

    def test_non_click_source_fails(self, click_action):
        result = validate_action(replace(click_action, source="hover"))
        assert not result.passed
        assert [c.name for c in result.failed_checks] == ["click_source"]

    def test_missing_fields_listed(self, click_action):
        result = validate_action(replace(click_action, symbol="", volume=None))
        assert not result.passed
        assert "symbol" in result.summary
        assert "volume" in result.summary

    def test_blank_string_is_empty(self, click_action):
        assert not validate_action(replace(click_action, timeframe="  ")).passed

    def test_zero_counts_as_present(self, click_action):
        assert validate_action(replace(click_action, volume=0)).passed

    def test_optional_fields_not_required(self, click_action):
        action = replace(click_action, color=None, window_start=None, window_end=None)
        assert validate_action(action).passed


class TestValidateUploadResult:
    def test_valid(self, upload_result):
        assert validate_upload_result(upload_result).passed

    def test_not_a_mapping(self):
        result = validate_upload_result(["volume_vs_open"])
        assert not result.passed
        assert result.failed_checks[0].name == "is_mapping"

    def test_missing_series(self, upload_result):
        del upload_result["volume_vs_low"]
        result = validate_upload_result(upload_result)
        assert [c.name for c in result.failed_checks] == ["volume_vs_low"]

    def test_series_not_a_sequence(self, upload_result):
        upload_result["volume_vs_high"] = "oops"
        upload_result["volume_vs_close"] = {"time": "t"}
        result = validate_upload_result(upload_result)
        assert {c.name for c in result.failed_checks} == {"volume_vs_high", "volume_vs_close"}

    def test_empty_series_allowed(self, upload_result):
        upload_result["volume_vs_open"] = []
        assert validate_upload_result(upload_result).passed

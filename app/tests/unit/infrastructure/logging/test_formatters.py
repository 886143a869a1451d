"""Unit tests for infrastructure.logging.formatters module.

Tests cover:
- add_app_info processor
- mask_sensitive_data processor
- truncate_large_values processor
"""

import pytest
from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
    SENSITIVE_PATTERNS,
)


@pytest.mark.unit
class TestAddAppInfo:
    def test_add_app_info_adds_name_and_version(self):
        processor = add_app_info("plex-user-directory", "abc123")

        result = processor(None, "info", {"event": "users_resolved"})

        assert result["app_name"] == "plex-user-directory"
        assert result["app_version"] == "abc123"
        assert result["event"] == "users_resolved"

    def test_add_app_info_with_unknown_version(self):
        result = add_app_info("test-app")(None, "info", {"event": "test"})

        assert result["app_version"] == "unknown"


@pytest.mark.unit
class TestMaskSensitiveData:
    def test_masks_token_keys(self):
        processor = mask_sensitive_data()
        event_dict = {
            "event": "user_token_found",
            "token": "abc",
            "access_token": "def",
            "X-Plex-Token": "ghi",
            "user_id": "1",
        }

        result = processor(None, "info", event_dict)

        assert result["token"] == "***REDACTED***"
        assert result["access_token"] == "***REDACTED***"
        assert result["X-Plex-Token"] == "***REDACTED***"
        assert result["user_id"] == "1"
        assert result["event"] == "user_token_found"

    def test_none_and_bool_values_are_kept(self):
        processor = mask_sensitive_data()

        result = processor(None, "info", {"token": None, "fetch_tokens": True})

        assert result["token"] is None
        assert result["fetch_tokens"] is True

    def test_custom_mask_and_patterns(self):
        processor = mask_sensitive_data(
            mask_value="[hidden]", additional_patterns=frozenset({"uuid"})
        )

        result = processor(None, "info", {"user_uuid": "uuid-1"})

        assert result["user_uuid"] == "[hidden]"

    def test_sensitive_patterns_cover_tokens(self):
        assert "token" in SENSITIVE_PATTERNS
        assert "auth" in SENSITIVE_PATTERNS


@pytest.mark.unit
class TestTruncateLargeValues:
    def test_truncates_long_strings(self):
        processor = truncate_large_values(max_length=10)

        result = processor(None, "info", {"body": "x" * 25})

        assert result["body"].startswith("x" * 10)
        assert "25 chars total" in result["body"]

    def test_short_values_untouched(self):
        processor = truncate_large_values(max_length=10)

        assert processor(None, "info", {"body": "short"})["body"] == "short"

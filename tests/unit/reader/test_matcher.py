"""
Unit tests for the field matcher
"""

import pytest

from hyperion.core.exceptions.custom_exceptions import DocumentFormatError
from hyperion.reader.matcher import FieldSchema

SCHEMA = FieldSchema().require_exactly_once("code").allow("title").allow("tags")


class TestFieldSchema:
    """Test required and allowed field handling"""

    @pytest.mark.parametrize(
        "names",
        [["code"], ["code", "title"], ["code", "tags", "title"]],
    )
    def test_matching_field_sets(self, names):
        assert SCHEMA.matches(names)

    @pytest.mark.parametrize(
        "names",
        [
            [],
            ["title"],
            ["code", "titel"],
            ["code", "code"],
            ["code", "title", "title"],
        ],
    )
    def test_rejected_field_sets(self, names):
        assert not SCHEMA.matches(names)

    def test_verdict_is_stable(self):
        names = ["code", "title"]
        assert SCHEMA.matches(names) == SCHEMA.matches(list(names))
        assert names == ["code", "title"]

    def test_unregistered_field_flips_verdict(self):
        assert SCHEMA.matches(["code"])
        assert not SCHEMA.matches(["code", "unknown"])

    def test_removing_required_field_flips_verdict(self):
        assert SCHEMA.matches(["code", "title"])
        assert not SCHEMA.matches(["title"])

    def test_registration_returns_new_schema(self):
        base = FieldSchema().require_exactly_once("code")
        extended = base.allow("title")
        assert not base.matches(["code", "title"])
        assert extended.matches(["code", "title"])

    def test_duplicate_registration_is_rejected(self):
        with pytest.raises(ValueError):
            SCHEMA.allow("code")
        with pytest.raises(ValueError):
            SCHEMA.require_exactly_once("title")
        with pytest.raises(ValueError):
            FieldSchema().allow("")

    def test_validate_reports_unknown_and_missing_fields(self):
        with pytest.raises(DocumentFormatError) as exc_info:
            SCHEMA.validate(["cod", "title"], "task")

        error = exc_info.value
        assert error.message == "The task fields are not correct!"
        assert error.details["unknown"] == ["cod"]
        assert error.details["missing"] == ["code"]

"""Tests for shared value objects."""

from uuid import uuid4

import pytest

from edtech.domain.common.exceptions import ValidationError
from edtech.domain.common.value_objects import Email, TutorId, UserId, UserName
from edtech.domain.identity.value_objects import UserRole


class TestEmail:
    def test_normalises_case_and_whitespace(self):
        assert Email("  Ada@Example.COM ").value == "ada@example.com"

    def test_equal_after_normalisation(self):
        assert Email("ADA@example.com") == Email("ada@example.com")

    def test_domain_and_local_part(self):
        email = Email("ada@example.com")
        assert email.domain == "example.com"
        assert email.local_part == "ada"

    @pytest.mark.parametrize("raw", ["", "   ", "no-at-sign", "ada@", "ada@example"])
    def test_rejects_invalid(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            Email(raw)
        assert exc_info.value.field == "email"

    def test_rejects_too_long(self):
        with pytest.raises(ValidationError):
            Email("a" * 250 + "@example.com")


class TestUserName:
    def test_capitalises_each_word(self):
        name = UserName("ada", "lovelace byron")
        assert name.first_name == "Ada"
        assert name.last_name == "Lovelace Byron"
        assert name.full_name == "Ada Lovelace Byron"

    def test_collapses_inner_whitespace(self):
        assert UserName("  Mary   Ann ", "Evans").first_name == "Mary Ann"

    def test_accepts_hyphen_and_apostrophe(self):
        name = UserName("Jean-Luc", "O'Neil")
        assert name.first_name == "Jean-luc"
        assert name.initials == "JO"

    def test_reports_both_parts_at_once(self):
        with pytest.raises(ValidationError) as exc_info:
            UserName("", "123")
        assert exc_info.value.fields == ["first_name", "last_name"]

    def test_rejects_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            UserName("A" * 51, "Smith")
        assert exc_info.value.fields == ["first_name"]


class TestEntityIds:
    def test_generate_gives_distinct_ids(self):
        assert UserId.generate() != UserId.generate()

    def test_from_string_round_trips(self):
        raw = uuid4()
        assert UserId.from_string(str(raw)).value == raw

    def test_ids_of_different_types_are_not_equal(self):
        raw = uuid4()
        assert UserId(raw) != TutorId(raw)

    @pytest.mark.parametrize("raw", ["", "  ", "not-a-uuid"])
    def test_from_string_rejects_garbage(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            UserId.from_string(raw)
        assert exc_info.value.field == "id"

    def test_requires_uuid_value(self):
        with pytest.raises(ValidationError):
            UserId("abc")  # type: ignore[arg-type]


class TestParsableEnum:
    def test_parse_is_case_insensitive(self):
        assert UserRole.parse("tutor", "role") is UserRole.TUTOR

    def test_parse_accepts_member(self):
        assert UserRole.parse(UserRole.ADMIN, "role") is UserRole.ADMIN

    def test_parse_lists_allowed_values(self):
        with pytest.raises(ValidationError) as exc_info:
            UserRole.parse("janitor", "role")
        assert exc_info.value.field == "role"
        assert "STUDENT" in exc_info.value.message

"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from datetime import timedelta

import pytest

from tenant_events.domain import EntityId, PageRequest, ScheduleDraft, TenantContext
from tenant_events.domain.enums import SessionType
from tenant_events.domain.errors import (
    ErrorCode,
    EventNotFoundError,
    InvalidInputError,
    StoreUnavailableError,
)

from conftest import BASE_TIME


class TestEntityId:
    """Tests for EntityId value object."""

    def test_from_string_valid_identifier(self):
        """EntityId.from_string accepts 24 hex characters."""
        entity_id = EntityId.from_string("65a1f0c2b3d4e5f60718293a")
        assert entity_id.value == "65a1f0c2b3d4e5f60718293a"

    def test_uppercase_is_normalized(self):
        """Uppercase hex is stored lowercase."""
        assert EntityId("65A1F0C2B3D4E5F60718293A").value == "65a1f0c2b3d4e5f60718293a"

    @pytest.mark.parametrize(
        "value", ["", "65a1f0c2b3d4e5f60718293", "65a1f0c2b3d4e5f60718293ab", "zza1f0c2b3d4e5f60718293a"]
    )
    def test_invalid_identifier_rejected(self, value):
        """EntityId raises ValueError for anything but 24 hex characters."""
        with pytest.raises(ValueError):
            EntityId.from_string(value)

    def test_generate_produces_distinct_valid_ids(self):
        first, second = EntityId.generate(), EntityId.generate()
        assert EntityId.is_valid(first.value)
        assert first != second

    def test_str_is_the_hex_value(self):
        assert str(EntityId("65a1f0c2b3d4e5f60718293a")) == "65a1f0c2b3d4e5f60718293a"


class TestPageRequest:
    """Tests for PageRequest value object."""

    def test_defaults(self):
        page = PageRequest()
        assert (page.page, page.limit, page.offset) == (1, 10, 0)

    def test_offset_skips_previous_pages(self):
        assert PageRequest(page=3, limit=10).offset == 20

    @pytest.mark.parametrize("field", ["page", "limit"])
    @pytest.mark.parametrize("value", [0, -1, True, "2"])
    def test_rejects_non_positive_or_non_integer(self, field, value):
        """Zero, negatives and non-integers are rejected, never clamped."""
        with pytest.raises(ValueError):
            PageRequest(**{field: value})


class TestTenantContext:
    def test_requires_tenant(self):
        with pytest.raises(ValueError):
            TenantContext(tenant_id="  ")

    def test_user_and_roles_are_optional(self):
        context = TenantContext(tenant_id="tenant-a")
        assert context.user_id is None
        assert context.roles == ()


class TestScheduleDraft:
    """Tests for ScheduleDraft input invariants."""

    def _draft(self, **overrides):
        values = {
            "event_id": EntityId.generate(),
            "title": "Keynote",
            "session_type": SessionType.KEYNOTE,
            "start_time": BASE_TIME,
            "end_time": BASE_TIME + timedelta(hours=1),
        }
        values.update(overrides)
        return ScheduleDraft(**values)

    def test_duplicate_speakers_rejected(self):
        speaker_id = EntityId.generate()
        with pytest.raises(ValueError):
            self._draft(speaker_ids=(speaker_id, speaker_id))

    def test_end_before_start_rejected(self):
        with pytest.raises(ValueError):
            self._draft(end_time=BASE_TIME - timedelta(minutes=1))


class TestDomainErrors:
    """Tests for the domain error hierarchy."""

    def test_invalid_input_names_the_field(self):
        error = InvalidInputError("limit", "limit must be >= 1")
        assert error.code is ErrorCode.INVALID_INPUT
        assert error.field == "limit"
        assert str(error) == "INVALID_INPUT: limit must be >= 1"

    def test_not_found_is_not_retriable(self):
        assert not EventNotFoundError("65a1f0c2b3d4e5f60718293a").retriable

    def test_store_unavailable_is_retriable(self):
        error = StoreUnavailableError("event_schedule")
        assert error.retriable
        assert error.entity == "event_schedule"

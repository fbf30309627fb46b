"""Unit tests for dashboard utilities."""

from datetime import timedelta
from unittest import mock

import pytest
from django.core.cache import cache
from django.db import OperationalError, ProgrammingError
from django.utils import timezone

from dashboard.models import Booking, DashboardStats
from dashboard.utils import (
    DASHBOARD_STATS_CACHE_KEY,
    build_villa_payload,
    compute_dashboard_stats,
    describe_store_error,
    filter_amenities,
    filter_proximity,
    filter_sleeping,
    generate_slug,
    get_dashboard_stats,
    invalidate_dashboard_stats,
    is_missing_table,
    parse_float,
    parse_int,
)


class TestGenerateSlug:
    """Tests for generate_slug."""

    def test_punctuation_and_padding(self):
        """Test runs of non-alphanumerics collapse and edges are trimmed."""
        assert generate_slug("  My Trip! 2024  ") == "my-trip-2024"

    def test_mixed_case_words(self):
        """Test the slug is lower-cased."""
        assert generate_slug("Best Warungs in UBUD") == "best-warungs-in-ubud"

    def test_only_symbols(self):
        """Test a title with no letters or digits gives an empty slug."""
        assert generate_slug("!!! ???") == ""

    def test_non_ascii_is_stripped(self):
        """Test characters outside a-z0-9 become separators."""
        assert generate_slug("Café & Spa") == "caf-spa"


class TestNumericCoercion:
    """Tests for parse_int and parse_float."""

    def test_parse_int_leading_number(self):
        """Test the leading integer is kept and the rest ignored."""
        assert parse_int("3 rooms", 1) == 3

    def test_parse_int_not_a_number(self):
        """Test text without a number falls back."""
        assert parse_int("abc", 1) == 1

    def test_parse_int_empty(self):
        """Test empty input falls back."""
        assert parse_int("", 2) == 2
        assert parse_int(None, 2) == 2

    def test_parse_int_zero_falls_back(self):
        """Test zero is treated like a missing value."""
        assert parse_int("0", 1) == 1

    def test_parse_int_truncates_decimals(self):
        """Test a decimal string keeps its integer part."""
        assert parse_int("2.7", 1) == 2

    def test_parse_int_negative_kept(self):
        """Test a negative leading integer is returned as-is."""
        assert parse_int("-3", 1) == -3

    def test_parse_float_decimal(self):
        """Test a decimal value is parsed."""
        assert parse_float("-8.4312", -8.5) == -8.4312

    def test_parse_float_trailing_text(self):
        """Test trailing text after the number is ignored."""
        assert parse_float("250.5m2", 0) == 250.5

    def test_parse_float_empty(self):
        """Test an empty price becomes zero."""
        assert parse_float("", 0) == 0

    def test_parse_float_zero_falls_back(self):
        """Test a zero latitude falls back to the default."""
        assert parse_float("0", -8.5) == -8.5


class TestFilters:
    """Tests for the nested list filters."""

    def test_filter_proximity_drops_blank_names(self):
        """Test places without a name are dropped."""
        items = [{"name": "", "distance": "5 min"}, {"name": "Ubud Market", "distance": "10 min"}]
        assert filter_proximity(items) == [{"name": "Ubud Market", "distance": "10 min"}]

    def test_filter_proximity_whitespace_only(self):
        """Test a whitespace-only name counts as blank."""
        assert filter_proximity([{"name": "   ", "distance": "1 km"}]) is None

    def test_filter_amenities_drops_empty_categories(self):
        """Test categories without items are dropped."""
        assert filter_amenities({"Kitchen": ["Oven"], "Safety": []}) == {"Kitchen": ["Oven"]}

    def test_filter_amenities_only_empty(self):
        """Test a mapping of empty categories becomes None."""
        assert filter_amenities({"Safety": []}) is None

    def test_filter_sleeping_empty(self):
        """Test an empty list becomes None."""
        assert filter_sleeping([]) is None

    def test_filter_sleeping_keeps_rooms(self):
        """Test arrangements with a room survive."""
        items = [{"room": "Master", "bed": "", "view": ""}, {"room": "", "bed": "1 King Bed", "view": ""}]
        assert filter_sleeping(items) == [{"room": "Master", "bed": "", "view": ""}]


class TestBuildVillaPayload:
    """Tests for build_villa_payload."""

    def build(self, fields, **overrides):
        kwargs = {
            "features": [],
            "images": [],
            "house_rules": {"check_in": "14:00"},
            "amenities": {},
            "proximity": [],
            "sleeping": [],
        }
        kwargs.update(overrides)
        return build_villa_payload(fields, **kwargs)

    def test_numeric_fallbacks(self):
        """Test empty or invalid numbers get their defaults."""
        payload = self.build({"name": "Villa", "description": "d", "price_per_night": "", "bedrooms": "abc", "latitude": ""})

        assert payload["price_per_night"] == 0
        assert payload["bedrooms"] == 1
        assert payload["guests"] == 2
        assert payload["latitude"] == -8.5
        assert payload["longitude"] == 115.2
        assert payload["pantry"] == 0

    def test_empty_nested_values_become_none(self):
        """Test empty amenities and fully blank lists are stored as None."""
        payload = self.build(
            {"name": "Villa", "description": "d"},
            proximity=[{"name": "", "distance": "3 km"}],
            sleeping=[{"room": "", "bed": "", "view": ""}],
        )

        assert payload["amenities_detail"] is None
        assert payload["proximity_list"] is None
        assert payload["sleeping_arrangements"] is None

    def test_images_and_amenities_kept(self):
        """Test non-empty gallery entries and amenities are kept."""
        payload = self.build(
            {"name": "Villa", "description": "d"},
            images=["https://example.com/a.jpg", ""],
            amenities={"Kitchen": ["Oven"]},
        )

        assert payload["images"] == ["https://example.com/a.jpg"]
        assert payload["amenities_detail"] == {"Kitchen": ["Oven"]}


class TestStoreErrors:
    """Tests for missing-table detection and error messages."""

    def test_sqlite_missing_table(self):
        """Test SQLite's message is recognised."""
        assert is_missing_table(OperationalError("no such table: dashboard_villa"))

    def test_postgres_missing_relation(self):
        """Test PostgreSQL's relation message is recognised."""
        assert is_missing_table(ProgrammingError('relation "dashboard_blogpost" does not exist'))

    def test_postgres_error_code(self):
        """Test SQLSTATE 42P01 on the driver error is recognised."""
        cause = mock.Mock(pgcode="42P01")
        exc = ProgrammingError("undefined table")
        exc.__cause__ = cause
        assert is_missing_table(exc)

    def test_other_errors(self):
        """Test unrelated errors are not reported as missing tables."""
        assert not is_missing_table(OperationalError("connection refused"))

    def test_describe_missing_table(self):
        """Test the migration hint message."""
        message = describe_store_error(OperationalError("no such table: dashboard_villa"), "creating villa")
        assert message == "Database table is missing while creating villa. Please run migrations."

    def test_describe_other_error(self):
        """Test other errors carry the original message."""
        message = describe_store_error(OperationalError("disk full"), "updating villa")
        assert message == "Error updating villa: disk full"


@pytest.mark.django_db
class TestDashboardStats:
    """Tests for dashboard statistics and their cache."""

    def test_empty_database(self):
        """Test stats without villas or bookings."""
        stats = compute_dashboard_stats()
        assert stats == DashboardStats(total_revenue=0.0, total_bookings=0, occupancy_rate=0.0, active_guests=0)

    def test_compute_with_active_booking(self, active_booking):
        """Test revenue, occupancy and active guests for one confirmed stay."""
        stats = compute_dashboard_stats()

        assert stats.total_revenue == 3000000.0
        assert stats.total_bookings == 1
        # Two of the last thirty nights are booked
        assert stats.occupancy_rate == 6.7
        assert stats.active_guests == 1

    def test_cancelled_bookings_ignored(self, villa):
        """Test cancelled bookings count for nothing."""
        today = timezone.localdate()
        Booking.objects.create(
            villa=villa,
            start_date=today - timedelta(days=3),
            end_date=today + timedelta(days=2),
            total_price=5000000,
            status="cancelled",
            guest_name="Ketut",
            guest_email="ketut@example.com",
        )
        stats = compute_dashboard_stats()

        assert stats.total_revenue == 0.0
        assert stats.total_bookings == 0
        assert stats.active_guests == 0

    def test_pending_bookings_count_without_revenue(self, villa):
        """Test pending bookings are counted but bring no revenue."""
        today = timezone.localdate()
        Booking.objects.create(
            villa=villa,
            start_date=today + timedelta(days=10),
            end_date=today + timedelta(days=12),
            total_price=7000000,
            status="pending",
            guest_name="Wayan",
            guest_email="wayan@example.com",
        )
        stats = compute_dashboard_stats()

        assert stats.total_bookings == 1
        assert stats.total_revenue == 0.0

    def test_stats_are_cached(self, villa):
        """Test the second call is served from the cache."""
        get_dashboard_stats()
        assert cache.get(DASHBOARD_STATS_CACHE_KEY) is not None

        with mock.patch("dashboard.utils.compute_dashboard_stats") as compute:
            get_dashboard_stats()
        compute.assert_not_called()

    def test_force_refresh(self, villa):
        """Test force_refresh recomputes even with a cached entry."""
        get_dashboard_stats()
        with mock.patch(
            "dashboard.utils.compute_dashboard_stats",
            return_value=DashboardStats(1.0, 1, 1.0, 1),
        ) as compute:
            stats = get_dashboard_stats(force_refresh=True)
        compute.assert_called_once()
        assert stats.total_bookings == 1

    def test_invalidate(self, villa):
        """Test invalidation reports whether an entry was removed."""
        get_dashboard_stats()
        assert invalidate_dashboard_stats() is True
        assert invalidate_dashboard_stats() is False

"""Tests for the JSON API."""

from unittest import mock

import pytest
from django.db import OperationalError
from django.urls import reverse

from dashboard.models import BlogPost, Villa


@pytest.mark.django_db
class TestVillaAPI:
    """Tests for the villa list/create endpoint."""

    def test_list(self, client, villa):
        """Test villas are listed with their nested structures."""
        response = client.get(reverse("dashboard:villa_list_api"))

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["name"] == "Villa Niskala"
        assert data[0]["sleeping_arrangements"][0]["room"] == "Bedroom 1"

    def test_create_normalises_nested_values(self, client):
        """Test blank rows are dropped and house rules are completed."""
        response = client.post(
            reverse("dashboard:villa_list_api"),
            data={
                "name": "Villa Tirta",
                "description": "Near the river",
                "price_per_night": 3500000,
                "features": ["WiFi", "WiFi", "AC"],
                "images": ["https://example.com/1.jpg", ""],
                "house_rules": {"pets": True},
                "amenities_detail": {"Kitchen": ["Oven", "Oven"], "Safety": []},
                "proximity_list": [
                    {"name": "", "distance": "5 min"},
                    {"name": "Ubud Market", "distance": "10 min"},
                ],
                "sleeping_arrangements": [{"room": "", "bed": "1 King Bed", "view": ""}],
            },
            content_type="application/json",
        )

        assert response.status_code == 201, response.json()
        villa = Villa.objects.get()
        assert villa.features == ["WiFi", "AC"]
        assert villa.images == ["https://example.com/1.jpg"]
        assert villa.amenities_detail == {"Kitchen": ["Oven"]}
        assert villa.proximity_list == [{"name": "Ubud Market", "distance": "10 min"}]
        assert villa.sleeping_arrangements is None
        assert villa.house_rules["pets"] is True
        assert villa.house_rules["check_in"] == "14:00"
        assert villa.house_rules["max_guests"] == 4

    def test_create_requires_name(self, client):
        """Test a villa without a name is rejected."""
        response = client.post(
            reverse("dashboard:villa_list_api"),
            data={"description": "No name"},
            content_type="application/json",
        )

        assert response.status_code == 400
        assert "name" in response.json()

    def test_missing_table(self, client):
        """Test a missing table is reported as a JSON error."""
        manager = mock.MagicMock()
        manager.order_by.side_effect = OperationalError("no such table: dashboard_villa")
        with mock.patch.object(Villa, "objects", manager):
            response = client.get(reverse("dashboard:villa_list_api"))

        assert response.status_code == 503
        assert response.json() == {
            "detail": "Database table is missing while handling villas. Please run migrations.",
            "missing_table": True,
        }


@pytest.mark.django_db
class TestBlogPostAPI:
    """Tests for the blog post list/create endpoint."""

    def test_create_derives_slug(self, client):
        """Test the slug is generated when missing."""
        response = client.post(
            reverse("dashboard:blog_list_api"),
            data={
                "title": "Best Warungs in Ubud",
                "excerpt": "Where to eat",
                "content": "Nasi campur",
                "category": "Food",
                "is_published": True,
            },
            content_type="application/json",
        )

        assert response.status_code == 201, response.json()
        assert response.json()["slug"] == "best-warungs-in-ubud"
        post = BlogPost.objects.get()
        assert post.published_at is not None
        assert post.author == "Admin"

    def test_list_newest_first(self, client, draft_post, published_post):
        """Test posts are listed newest first."""
        response = client.get(reverse("dashboard:blog_list_api"))

        assert [post["title"] for post in response.json()] == ["Eating in Ubud", "Hidden Waterfalls"]


@pytest.mark.django_db
class TestDashboardStatsAPI:
    """Tests for the stats endpoint."""

    def test_stats(self, client, active_booking):
        """Test the stats endpoint returns the computed values."""
        response = client.get(reverse("dashboard:dashboard_stats"))

        assert response.status_code == 200
        assert response.json() == {
            "total_revenue": 3000000.0,
            "total_bookings": 1,
            "occupancy_rate": 6.7,
            "active_guests": 1,
        }

    def test_store_error(self, client):
        """Test a database failure is reported as 503."""
        with mock.patch("dashboard.views.get_dashboard_stats", side_effect=OperationalError("disk I/O error")):
            response = client.get(reverse("dashboard:dashboard_stats"))

        assert response.status_code == 503
        assert response.json()["missing_table"] is False

from datetime import timedelta

import pytest
from django.core.cache import cache
from django.utils import timezone

from dashboard.models import BlogPost, Booking, Villa


@pytest.fixture(autouse=True)
def clear_cache():
    """Keep cached dashboard stats from leaking between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def villa(db):
    """A saved villa with every nested structure filled in."""
    return Villa.objects.create(
        name="Villa Niskala",
        description="Rice field villa near Ubud",
        price_per_night=3500000,
        bedrooms=3,
        guests=6,
        bathrooms=2,
        features=["Private Pool", "WiFi"],
        images=["https://example.com/1.jpg"],
        amenities_detail={"Kitchen": ["Oven", "Kettle"]},
        proximity_list=[{"name": "Ubud Market", "distance": "10 min drive"}],
        sleeping_arrangements=[{"room": "Bedroom 1", "bed": "1 King Bed", "view": "Jungle View"}],
    )


@pytest.fixture
def draft_post(db):
    """An unpublished blog post."""
    return BlogPost.objects.create(
        title="Hidden Waterfalls",
        slug="hidden-waterfalls",
        excerpt="Five waterfalls off the tourist trail",
        content="# Waterfalls",
        category="Guide",
    )


@pytest.fixture
def published_post(db):
    """A published blog post."""
    return BlogPost.objects.create(
        title="Eating in Ubud",
        slug="eating-in-ubud",
        excerpt="Where to eat",
        content="Warungs everywhere",
        category="Food",
        is_published=True,
    )


@pytest.fixture
def active_booking(villa):
    """A confirmed booking that started two days ago and ends tomorrow."""
    today = timezone.localdate()
    return Booking.objects.create(
        villa=villa,
        start_date=today - timedelta(days=2),
        end_date=today + timedelta(days=1),
        total_price=3000000,
        status="confirmed",
        guest_name="Made Wirawan",
        guest_email="made@example.com",
    )

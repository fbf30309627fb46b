"""
Utilities for the dashboard: slugs, numeric coercion, store errors,
toasts and cached dashboard statistics
"""
import logging
import re
from dataclasses import asdict
from datetime import timedelta

from django.conf import settings
from django.contrib import messages
from django.core.cache import cache
from django.db.models import Sum
from django.utils import timezone

from .models import Booking, DashboardStats, Villa

logger = logging.getLogger(__name__)

DASHBOARD_STATS_CACHE_KEY = 'dashboard_stats'
MISSING_TABLE_CODE = '42P01'
OCCUPANCY_WINDOW_DAYS = 30

_NON_ALNUM = re.compile(r'[^a-z0-9]+')
_INT_PREFIX = re.compile(r'^\s*([+-]?\d+)')
_FLOAT_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')

# Field -> fallback used when the submitted value is empty, not a number or zero
VILLA_INT_FIELDS = {
    'bedrooms': 1,
    'guests': 2,
    'bathrooms': 1,
    'levels': 1,
    'pantry': 0,
}
VILLA_FLOAT_FIELDS = {
    'price_per_night': 0,
    'land_area': 0,
    'building_area': 0,
    'pool_area': 0,
    'latitude': -8.5,
    'longitude': 115.2,
}


def generate_slug(title):
    """
    Derive a URL slug from a title

    Lower-cases the title, collapses every run of characters outside
    [a-z0-9] into one hyphen and trims hyphens from both ends.
    """
    return _NON_ALNUM.sub('-', (title or '').lower()).strip('-')


def parse_int(value, fallback):
    """
    Parse the leading integer of a submitted value

    Returns ``fallback`` when there is no leading integer or it is zero.
    """
    match = _INT_PREFIX.match(str(value)) if value is not None else None
    number = int(match.group(1)) if match else 0
    return number or fallback


def parse_float(value, fallback):
    """
    Parse the leading decimal number of a submitted value

    Returns ``fallback`` when there is no leading number or it is zero.
    """
    match = _FLOAT_PREFIX.match(str(value)) if value is not None else None
    number = float(match.group(1)) if match else 0.0
    return number or fallback


def filter_proximity(items):
    """Drop nearby places without a name; None when nothing is left"""
    kept = [item for item in items or [] if (item.get('name') or '').strip()]
    return kept or None


def filter_sleeping(items):
    """Drop sleeping arrangements without a room name; None when nothing is left"""
    kept = [item for item in items or [] if (item.get('room') or '').strip()]
    return kept or None


def filter_amenities(amenities):
    """Drop categories without items; None when nothing is left"""
    kept = {category: list(items) for category, items in (amenities or {}).items() if items}
    return kept or None


def build_villa_payload(fields, features, images, house_rules, amenities, proximity, sleeping):
    """
    Assemble the villa record written to the database

    Args:
        fields (dict): raw text of the plain inputs (name, description,
            image_url and the numeric fields)
        features (list): feature tags
        images (list): gallery image URLs, empty entries are dropped
        house_rules (dict): full house rules record
        amenities (dict): category -> items, categories without items are
            dropped and the whole mapping is stored as None when empty
        proximity (list): nearby places, blank names filtered
        sleeping (list): sleeping arrangements, blank rooms filtered

    Returns:
        dict: keyword arguments for ``Villa``
    """
    payload = {
        'name': fields.get('name', ''),
        'description': fields.get('description', ''),
        'image_url': fields.get('image_url', ''),
    }
    for name, fallback in VILLA_FLOAT_FIELDS.items():
        payload[name] = parse_float(fields.get(name), fallback)
    for name, fallback in VILLA_INT_FIELDS.items():
        payload[name] = parse_int(fields.get(name), fallback)

    payload.update({
        'features': list(features),
        'images': [url for url in images if url],
        'house_rules': dict(house_rules),
        'amenities_detail': filter_amenities(amenities),
        'proximity_list': filter_proximity(proximity),
        'sleeping_arrangements': filter_sleeping(sleeping),
    })
    return payload


def is_missing_table(exc):
    """
    Check whether a database error means the table was never migrated

    PostgreSQL reports SQLSTATE 42P01, SQLite reports "no such table".
    """
    cause = exc.__cause__
    code = getattr(cause, 'pgcode', None) or getattr(cause, 'sqlstate', None)
    if code == MISSING_TABLE_CODE:
        return True
    message = str(exc).lower()
    return 'no such table' in message or ('relation' in message and 'does not exist' in message)


def describe_store_error(exc, action):
    """
    Build the human readable message for a failed database call

    Args:
        exc (Exception): the database error
        action (str): what was being done, e.g. "creating villa"

    Returns:
        str: message shown inline or in a toast
    """
    if is_missing_table(exc):
        return f"Database table is missing while {action}. Please run migrations."
    return f"Error {action}: {exc}"


def toast_success(request, title, message):
    messages.success(request, f"{title}: {message}")


def toast_error(request, title, message):
    messages.error(request, f"{title}: {message}")


def compute_dashboard_stats(today=None):
    """Compute dashboard statistics straight from bookings"""
    today = today or timezone.localdate()
    window_start = today - timedelta(days=OCCUPANCY_WINDOW_DAYS)

    bookings = Booking.objects.exclude(status='cancelled')
    revenue = bookings.filter(status__in=['confirmed', 'completed']).aggregate(total=Sum('total_price'))['total']

    booked_nights = 0
    for booking in bookings.filter(start_date__lt=today, end_date__gt=window_start):
        start = max(booking.start_date, window_start)
        end = min(booking.end_date, today)
        booked_nights += max((end - start).days, 0)

    villa_count = Villa.objects.count()
    available_nights = villa_count * OCCUPANCY_WINDOW_DAYS
    occupancy = round(booked_nights / available_nights * 100, 1) if available_nights else 0.0

    active_guests = bookings.filter(
        status='confirmed',
        start_date__lte=today,
        end_date__gt=today,
    ).count()

    return DashboardStats(
        total_revenue=float(revenue or 0),
        total_bookings=bookings.count(),
        occupancy_rate=occupancy,
        active_guests=active_guests,
    )


def get_dashboard_stats(force_refresh=False):
    """
    Get dashboard statistics with caching

    Args:
        force_refresh (bool): Force cache refresh

    Returns:
        DashboardStats: current statistics
    """
    if force_refresh:
        logger.info("Forcing cache refresh for dashboard stats")
        cache.delete(DASHBOARD_STATS_CACHE_KEY)

    cached_data = cache.get(DASHBOARD_STATS_CACHE_KEY)
    if cached_data is not None:
        logger.info(f"Cache hit for {DASHBOARD_STATS_CACHE_KEY}")
        return DashboardStats(**cached_data)

    logger.info(f"Cache miss for {DASHBOARD_STATS_CACHE_KEY}, computing from database")
    stats = compute_dashboard_stats()
    cache.set(DASHBOARD_STATS_CACHE_KEY, asdict(stats), settings.DASHBOARD_STATS_TIMEOUT)
    return stats


def invalidate_dashboard_stats():
    """
    Invalidate cached dashboard statistics

    Returns:
        bool: whether a cached entry was deleted
    """
    deleted = bool(cache.delete(DASHBOARD_STATS_CACHE_KEY))
    if deleted:
        logger.info(f"Invalidated cache key: {DASHBOARD_STATS_CACHE_KEY}")
    return deleted

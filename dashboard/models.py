from dataclasses import dataclass

from django.db import models
from django.core.validators import MinValueValidator
import uuid


def default_house_rules():
    return {
        'check_in': '14:00',
        'check_out': '11:00',
        'quiet_hours': '22:00 - 07:00',
        'parties': False,
        'smoking': False,
        'pets': False,
        'max_guests': 4,
    }


class Villa(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField()
    price_per_night = models.DecimalField(max_digits=14, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    bedrooms = models.IntegerField(default=1)
    guests = models.IntegerField(default=2)
    bathrooms = models.IntegerField(default=1)
    levels = models.IntegerField(default=1)
    pantry = models.IntegerField(default=0)
    land_area = models.FloatField(default=0)
    building_area = models.FloatField(default=0)
    pool_area = models.FloatField(default=0)
    latitude = models.FloatField(default=-8.5)
    longitude = models.FloatField(default=115.2)
    image_url = models.CharField(max_length=500, blank=True)
    images = models.JSONField(default=list, blank=True)
    features = models.JSONField(default=list, blank=True)
    house_rules = models.JSONField(default=default_house_rules)
    amenities_detail = models.JSONField(null=True, blank=True)
    proximity_list = models.JSONField(null=True, blank=True)
    sleeping_arrangements = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['created_at'], name='villa_created_idx'),
        ]

    def __str__(self):
        return self.name


class BlogPost(models.Model):
    CATEGORIES = [
        ('Travel', 'Travel'),
        ('Culture', 'Culture'),
        ('Wellness', 'Wellness'),
        ('Food', 'Food'),
        ('Design', 'Design'),
        ('Guide', 'Guide'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    slug = models.CharField(max_length=220, blank=True)
    excerpt = models.TextField()
    content = models.TextField()
    category = models.CharField(max_length=20, choices=CATEGORIES, default='Travel')
    author = models.CharField(max_length=100, default='Admin')
    image_url = models.CharField(max_length=500, blank=True)
    is_published = models.BooleanField(default=False)
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['slug'], name='blogpost_slug_idx'),
            models.Index(fields=['created_at'], name='blogpost_created_idx'),
        ]

    def __str__(self):
        return self.title


class Booking(models.Model):
    STATUSES = [
        ('pending', 'Pending'),
        ('confirmed', 'Confirmed'),
        ('cancelled', 'Cancelled'),
        ('completed', 'Completed'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    villa = models.ForeignKey(Villa, on_delete=models.CASCADE, related_name='bookings')
    start_date = models.DateField()
    end_date = models.DateField()
    total_price = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(0)])
    status = models.CharField(max_length=20, choices=STATUSES, default='pending')
    guest_name = models.CharField(max_length=200)
    guest_email = models.EmailField()
    guest_whatsapp = models.CharField(max_length=50, blank=True)
    special_request = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.guest_name} - {self.villa} ({self.start_date} to {self.end_date})"


class Experience(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField()
    image_url = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class AdminUser(models.Model):
    ROLES = [
        ('admin', 'Admin'),
        ('super_admin', 'Super Admin'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=ROLES, default='admin')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.email} ({self.role})"


@dataclass
class DashboardStats:
    """Headline numbers for the dashboard home page; never persisted"""
    total_revenue: float
    total_bookings: int
    occupancy_rate: float
    active_guests: int

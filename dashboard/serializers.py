from rest_framework import serializers

from .models import BlogPost, Villa
from .utils import filter_proximity, filter_sleeping, generate_slug


class HouseRulesSerializer(serializers.Serializer):
    check_in = serializers.CharField(default='14:00', allow_blank=True)
    check_out = serializers.CharField(default='11:00', allow_blank=True)
    quiet_hours = serializers.CharField(default='22:00 - 07:00', allow_blank=True)
    parties = serializers.BooleanField(default=False)
    smoking = serializers.BooleanField(default=False)
    pets = serializers.BooleanField(default=False)
    max_guests = serializers.IntegerField(default=4, min_value=1)


class ProximityItemSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True)
    distance = serializers.CharField(allow_blank=True, default='')


class SleepingItemSerializer(serializers.Serializer):
    room = serializers.CharField(allow_blank=True)
    bed = serializers.CharField(allow_blank=True, default='')
    view = serializers.CharField(allow_blank=True, default='')


class VillaSerializer(serializers.ModelSerializer):
    """
    Villa with its nested structures validated at the API boundary

    Blank nearby places and sleeping rows are dropped, empty amenity
    categories are dropped, and empty nested values are stored as null.
    """
    features = serializers.ListField(child=serializers.CharField(), required=False)
    images = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    house_rules = HouseRulesSerializer(required=False)
    amenities_detail = serializers.DictField(
        child=serializers.ListField(child=serializers.CharField()),
        required=False,
        allow_null=True,
    )
    proximity_list = ProximityItemSerializer(many=True, required=False, allow_null=True)
    sleeping_arrangements = SleepingItemSerializer(many=True, required=False, allow_null=True)

    class Meta:
        model = Villa
        fields = [
            'id', 'name', 'description', 'price_per_night', 'bedrooms', 'guests',
            'bathrooms', 'levels', 'pantry', 'land_area', 'building_area', 'pool_area',
            'latitude', 'longitude', 'image_url', 'images', 'features', 'house_rules',
            'amenities_detail', 'proximity_list', 'sleeping_arrangements',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_features(self, value):
        # Dedup keeps the first occurrence; order is not changed
        return list(dict.fromkeys(tag.strip() for tag in value if tag.strip()))

    def validate_images(self, value):
        return [url for url in value if url]

    def validate_amenities_detail(self, value):
        if not value:
            return None
        cleaned = {}
        for category, items in value.items():
            items = list(dict.fromkeys(item.strip() for item in items if item.strip()))
            if items:
                cleaned[category] = items
        return cleaned or None

    def validate_proximity_list(self, value):
        return filter_proximity([dict(item) for item in value or []])

    def validate_sleeping_arrangements(self, value):
        return filter_sleeping([dict(item) for item in value or []])

    def create(self, validated_data):
        if 'house_rules' in validated_data:
            validated_data['house_rules'] = dict(validated_data['house_rules'])
        return Villa.objects.create(**validated_data)

    def update(self, instance, validated_data):
        if 'house_rules' in validated_data:
            validated_data['house_rules'] = dict(validated_data['house_rules'])
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance


class BlogPostSerializer(serializers.ModelSerializer):
    class Meta:
        model = BlogPost
        fields = [
            'id', 'title', 'slug', 'excerpt', 'content', 'category', 'author',
            'image_url', 'is_published', 'published_at', 'created_at',
        ]
        read_only_fields = ['id', 'published_at', 'created_at']

    def validate(self, attrs):
        if not attrs.get('slug') and attrs.get('title'):
            attrs['slug'] = generate_slug(attrs['title'])
        return attrs


class DashboardStatsSerializer(serializers.Serializer):
    total_revenue = serializers.FloatField()
    total_bookings = serializers.IntegerField()
    occupancy_rate = serializers.FloatField()
    active_guests = serializers.IntegerField()

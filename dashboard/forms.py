import logging

from django import forms

from .editors import (
    AmenitiesEditor,
    FeaturesTagInput,
    GalleryEditor,
    HouseRulesEditor,
    ProximityEditor,
    SleepingEditor,
)
from .location import LocationPicker, search_url
from .models import BlogPost
from .utils import VILLA_FLOAT_FIELDS, VILLA_INT_FIELDS, build_villa_payload, generate_slug

logger = logging.getLogger(__name__)

VILLA_TEXT_FIELDS = ['name', 'description', 'image_url']
VILLA_NUMERIC_FIELDS = list(VILLA_FLOAT_FIELDS) + list(VILLA_INT_FIELDS)


class BlogPostForm(forms.ModelForm):
    class Meta:
        model = BlogPost
        fields = ['title', 'slug', 'excerpt', 'content', 'category', 'author', 'image_url', 'is_published']
        widgets = {
            'excerpt': forms.Textarea(attrs={'rows': 3, 'placeholder': 'Brief summary for listing pages...'}),
            'content': forms.Textarea(attrs={'rows': 16, 'placeholder': 'Write your article content here (supports Markdown)...'}),
            'slug': forms.TextInput(attrs={'placeholder': 'url-friendly-slug'}),
        }
        labels = {
            'is_published': 'Publish immediately',
        }

    def clean(self):
        cleaned_data = super().clean()
        # A slug typed by hand is kept as-is; only a blank one is derived
        if not cleaned_data.get('slug') and cleaned_data.get('title'):
            cleaned_data['slug'] = generate_slug(cleaned_data['title'])
        return cleaned_data


class VillaForm(forms.Form):
    """
    Plain villa inputs

    Numeric inputs are free text: bad numbers fall back to defaults when
    the payload is built instead of blocking the submission.
    """
    name = forms.CharField(max_length=200)
    description = forms.CharField(widget=forms.Textarea)
    image_url = forms.CharField(max_length=500, required=False)
    price_per_night = forms.CharField(required=False)
    bedrooms = forms.CharField(required=False)
    guests = forms.CharField(required=False)
    bathrooms = forms.CharField(required=False)
    levels = forms.CharField(required=False)
    pantry = forms.CharField(required=False)
    land_area = forms.CharField(required=False)
    building_area = forms.CharField(required=False)
    pool_area = forms.CharField(required=False)
    latitude = forms.CharField(required=False)
    longitude = forms.CharField(required=False)


def _flag(value):
    return value in ('1', 'true', 'on', True)


class VillaEditorState:
    """
    Everything the villa page edits, rebuilt from one POST

    The page is a single HTML form: the editors' values travel as hidden
    inputs and every button names one action. ``dispatch`` applies that
    action to a freshly rebuilt state and the page is rendered again.
    """

    def __init__(self, fields=None, features=None, images=None, house_rules=None,
                 amenities=None, proximity=None, sleeping=None):
        self.fields = {name: '' for name in VILLA_TEXT_FIELDS + VILLA_NUMERIC_FIELDS}
        self.fields.update({'levels': '1', 'pantry': '1'})
        self.fields.update(fields or {})
        self.features = FeaturesTagInput(features)
        self.gallery = GalleryEditor(images)
        self.house_rules = HouseRulesEditor(house_rules)
        self.amenities = AmenitiesEditor(amenities)
        self.proximity = ProximityEditor(proximity)
        self.sleeping = SleepingEditor(sleeping)
        self.location = LocationPicker(
            self.fields['latitude'], self.fields['longitude'], on_change=self._set_coordinates,
        )
        self.pending_image = ''
        self.search_query = ''
        self.search_link = None
        # Position reported by the browser for the "use current position" action
        self.geo = {}

    def _set_coordinates(self, latitude, longitude):
        self.fields['latitude'] = latitude
        self.fields['longitude'] = longitude

    @classmethod
    def from_instance(cls, villa):
        fields = {name: getattr(villa, name) for name in VILLA_TEXT_FIELDS}
        fields.update({name: str(getattr(villa, name)) for name in VILLA_NUMERIC_FIELDS})
        return cls(
            fields=fields,
            features=villa.features,
            images=villa.images,
            house_rules=villa.house_rules,
            amenities=villa.amenities_detail,
            proximity=villa.proximity_list,
            sleeping=villa.sleeping_arrangements,
        )

    @classmethod
    def from_post(cls, data):
        """Rebuild the state from the posted form"""
        fields = {name: data.get(name, '') for name in VILLA_TEXT_FIELDS + VILLA_NUMERIC_FIELDS}

        amenities = {
            category: data.getlist(f'amenity_items:{category}')
            for category in data.getlist('amenity_category')
        }

        state = cls(
            fields=fields,
            features=data.getlist('features'),
            images=data.getlist('images'),
            amenities=amenities,
            proximity=cls._rows(data, 'proximity', ProximityEditor.fields),
            sleeping=cls._rows(data, 'sleeping', SleepingEditor.fields),
        )
        for key in HouseRulesEditor.TIME_FIELDS + ('max_guests',):
            if f'house_rules-{key}' in data:
                state.house_rules.update(key, data.get(f'house_rules-{key}'))
        for key in HouseRulesEditor.TOGGLES:
            if f'house_rules-{key}' in data:
                state.house_rules.update(key, _flag(data.get(f'house_rules-{key}')))

        state.features.pending = data.get('feature_input', '')
        state.pending_image = data.get('new_image', '')
        for category in state.amenities.categories:
            state.amenities.set_pending_item(category, data.get(f'amenity_pending:{category}', ''))
        state.amenities.set_pending_category(data.get('amenity_new_category', ''))

        location = state.location
        location.is_open = _flag(data.get('map_open'))
        if location.is_open:
            location.set_draft(
                data.get('draft_latitude', location.draft_latitude),
                data.get('draft_longitude', location.draft_longitude),
            )
        state.search_query = data.get('map_query', '')
        state.geo = {
            'latitude': data.get('geo_latitude'),
            'longitude': data.get('geo_longitude'),
            'error': data.get('geo_error'),
            'supported': data.get('geo_supported', '1') != '0',
        }
        return state

    @staticmethod
    def _rows(data, prefix, fields):
        try:
            total = int(data.get(f'{prefix}-TOTAL', 0))
        except ValueError:
            total = 0
        return [
            {field: data.get(f'{prefix}-{index}-{field}', '') for field in fields}
            for index in range(total)
        ]

    def dispatch(self, action):
        """
        Apply one named editor action

        Raises:
            ValueError: unknown action or malformed argument
            KeyError / IndexError: argument names nothing in the state
        """
        name, _, arg = action.partition(':')
        logger.debug(f"Villa editor action {name!r} ({arg!r})")

        if name == 'feature_commit':
            self.features.commit()
        elif name == 'feature_backspace':
            self.features.backspace()
        elif name == 'feature_add':
            self.features.add_tag(arg)
        elif name == 'feature_remove':
            self.features.remove_tag(int(arg))
        elif name == 'rule_toggle':
            self.house_rules.toggle(arg)
        elif name == 'amenity_add':
            self.amenities.add_item(arg)
        elif name == 'amenity_remove':
            category, _, index = arg.rpartition(':')
            self.amenities.remove_item(category, int(index))
        elif name == 'amenity_category':
            self.amenities.add_category()
        elif name == 'proximity_add':
            self.proximity.add()
        elif name == 'proximity_remove':
            self.proximity.remove(int(arg))
        elif name == 'sleeping_add':
            self.sleeping.add()
        elif name == 'sleeping_remove':
            self.sleeping.remove(int(arg))
        elif name == 'image_add':
            self.gallery.add(self.pending_image)
            self.pending_image = ''
        elif name == 'image_remove':
            self.gallery.remove(int(arg))
        elif name == 'map_open':
            self.location.open()
        elif name == 'map_cancel':
            self.location.cancel()
        elif name == 'map_apply':
            self.location.apply()
        elif name == 'map_preset':
            self.location.choose_preset(arg)
        elif name == 'map_locate':
            self._locate()
        elif name == 'map_dismiss':
            self.location.dismiss_alert()
        elif name == 'map_search':
            self.search_link = search_url(self.search_query)
        else:
            raise ValueError(f"Unknown villa editor action: {action}")

    def _locate(self):
        geo = self.geo
        coords = None
        if geo.get('latitude') and geo.get('longitude'):
            try:
                coords = (float(geo['latitude']), float(geo['longitude']))
            except ValueError:
                coords = None
        self.location.use_current_position(
            coords=coords, error=geo.get('error'), supported=geo.get('supported', True),
        )

    def form(self):
        return VillaForm(data=self.fields)

    def payload(self):
        return build_villa_payload(
            self.fields,
            features=self.features.value,
            images=self.gallery.value,
            house_rules=self.house_rules.value,
            amenities=self.amenities.value,
            proximity=self.proximity.value,
            sleeping=self.sleeping.value,
        )

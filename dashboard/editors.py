"""
Field editors for the villa form

Each editor owns one slice of the villa record. Every mutating operation
builds a complete new value, stores it on ``value`` and hands it to the
optional ``on_change`` callback, so the owner always receives a
fully-formed value and never a partial one. Editors do not validate and do
not drop blank rows; that happens when the owning form is submitted.
"""
from .models import default_house_rules
from .utils import parse_int

DEFAULT_HOUSE_RULES = default_house_rules()

DEFAULT_AMENITY_CATEGORIES = ['Bathroom', 'Bedroom', 'Entertainment', 'Kitchen', 'Outdoor']

FEATURE_PRESETS = [
    'Private Pool', 'Rice Field View', 'WiFi', 'AC', 'Kitchen',
    'Jungle View', 'Garden', 'Parking', 'BBQ Area', 'Bathtub',
    'Breakfast Included', '24/7 Service', 'Laundry', 'Yoga Deck',
]

BED_OPTIONS = ['1 King Bed', '1 Queen Bed', '2 Twin Beds', '1 Single Bed', '1 Sofa Bed', 'Bunk Beds']


class FieldEditor:
    """Base class: holds a value and reports every change to the owner"""

    def __init__(self, value, on_change=None):
        self.value = value
        self.on_change = on_change

    def _emit(self, value):
        self.value = value
        if self.on_change is not None:
            self.on_change(value)
        return value


class HouseRulesEditor(FieldEditor):
    TIME_FIELDS = ('check_in', 'check_out', 'quiet_hours')
    TOGGLES = ('pets', 'smoking', 'parties')

    def __init__(self, value=None, on_change=None):
        rules = dict(DEFAULT_HOUSE_RULES)
        rules.update(value or {})
        super().__init__(rules, on_change)

    def update(self, key, value):
        """Replace one field and emit the whole record"""
        if key not in DEFAULT_HOUSE_RULES:
            raise KeyError(key)
        if key == 'max_guests':
            value = parse_int(value, 1)
        elif key in self.TOGGLES:
            value = bool(value)
        return self._emit({**self.value, key: value})

    def toggle(self, key):
        """Flip one of the boolean permissions, leaving the others alone"""
        if key not in self.TOGGLES:
            raise KeyError(key)
        return self.update(key, not self.value[key])


class AmenitiesEditor(FieldEditor):
    """
    Category -> item list editor

    ``pending_items`` and ``pending_category`` are the unsaved text inputs;
    they are never part of the persisted value.
    """

    def __init__(self, value=None, on_change=None, pending_items=None, pending_category=''):
        super().__init__({category: list(items) for category, items in (value or {}).items()}, on_change)
        self.pending_items = dict(pending_items or {})
        self.pending_category = pending_category

    @property
    def categories(self):
        """Default categories first, then any other category in the value"""
        extra = [category for category in self.value if category not in DEFAULT_AMENITY_CATEGORIES]
        return DEFAULT_AMENITY_CATEGORIES + extra

    def category_rows(self):
        return [
            {
                'name': category,
                'items': self.value.get(category, []),
                'pending': self.pending_items.get(category, ''),
                'present': category in self.value,
            }
            for category in self.categories
        ]

    def set_pending_item(self, category, text):
        self.pending_items[category] = text

    def add_item(self, category):
        item = (self.pending_items.get(category) or '').strip()
        current = self.value.get(category, [])
        if not item or item in current:
            return self.value
        self.pending_items[category] = ''
        return self._emit({**self.value, category: current + [item]})

    def remove_item(self, category, index):
        """Remove an item; a category left without items is dropped"""
        current = list(self.value.get(category, []))
        del current[index]
        if not current:
            remaining = {key: items for key, items in self.value.items() if key != category}
            return self._emit(remaining)
        return self._emit({**self.value, category: current})

    def set_pending_category(self, text):
        self.pending_category = text

    def add_category(self):
        category = (self.pending_category or '').strip()
        if not category or category in self.value:
            return self.value
        self.pending_category = ''
        return self._emit({**self.value, category: []})


class RecordListEditor(FieldEditor):
    """Ordered list of fixed-shape records; no reordering"""

    fields = ()

    def __init__(self, value=None, on_change=None):
        super().__init__([self._shape(item) for item in value or []], on_change)

    def _shape(self, item):
        return {field: item.get(field, '') or '' for field in self.fields}

    def blank(self):
        return {field: '' for field in self.fields}

    def add(self):
        return self._emit(self.value + [self.blank()])

    def update(self, index, key, value):
        if key not in self.fields:
            raise KeyError(key)
        updated = list(self.value)
        updated[index] = {**updated[index], key: value}
        return self._emit(updated)

    def remove(self, index):
        if not 0 <= index < len(self.value):
            raise IndexError(index)
        return self._emit([item for i, item in enumerate(self.value) if i != index])


class ProximityEditor(RecordListEditor):
    fields = ('name', 'distance')


class SleepingEditor(RecordListEditor):
    fields = ('room', 'bed', 'view')
    bed_options = BED_OPTIONS


class FeaturesTagInput(FieldEditor):
    """Tag list with a pending text input and preset quick-add chips"""

    def __init__(self, value=None, on_change=None, pending=''):
        super().__init__(list(value or []), on_change)
        self.pending = pending

    @property
    def available_presets(self):
        return [preset for preset in FEATURE_PRESETS if preset not in self.value]

    def add_tag(self, tag):
        trimmed = (tag or '').strip()
        if not trimmed or trimmed in self.value:
            return self.value
        return self._emit(self.value + [trimmed])

    def remove_tag(self, index):
        if not 0 <= index < len(self.value):
            raise IndexError(index)
        return self._emit([tag for i, tag in enumerate(self.value) if i != index])

    def commit(self):
        """Commit key: add the pending text as a tag and clear the input"""
        pending, self.pending = self.pending, ''
        return self.add_tag(pending)

    def backspace(self):
        """Deletion key on an empty input removes the most recent tag"""
        if self.pending or not self.value:
            return self.value
        return self.remove_tag(len(self.value) - 1)


class GalleryEditor(FieldEditor):
    """Ordered list of gallery image URLs"""

    def __init__(self, value=None, on_change=None):
        super().__init__(list(value or []), on_change)

    def add(self, url):
        url = (url or '').strip()
        if not url:
            return self.value
        return self._emit(self.value + [url])

    def remove(self, index):
        if not 0 <= index < len(self.value):
            raise IndexError(index)
        return self._emit([url for i, url in enumerate(self.value) if i != index])

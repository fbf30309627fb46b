"""
Location picker for the villa form

The picker keeps the applied coordinates (what the villa form submits)
apart from a draft that only exists while the map modal is open. The draft
reaches the applied coordinates through ``apply()`` and nothing else.
"""
import logging
from urllib.parse import quote

logger = logging.getLogger(__name__)

# Ubud center
DEFAULT_LATITUDE = '-8.5069'
DEFAULT_LONGITUDE = '115.2625'

PRESET_LOCATIONS = [
    {'name': 'Ubud Center', 'lat': '-8.5069', 'lng': '115.2625'},
    {'name': 'Tegallalang', 'lat': '-8.4312', 'lng': '115.2792'},
    {'name': 'Monkey Forest', 'lat': '-8.5186', 'lng': '115.2588'},
    {'name': 'Campuhan Ridge', 'lat': '-8.5028', 'lng': '115.2522'},
]

GEOLOCATION_FAILED = 'Could not get current location. Please enter coordinates manually.'
GEOLOCATION_UNSUPPORTED = 'Geolocation is not supported by this browser.'

EMBED_URL = (
    'https://www.google.com/maps/embed?pb=!1m18!1m12!1m3!1d3000!2d{lng}!3d{lat}'
    '!2m3!1f0!2f0!3f0!3m2!1i1024!2i768!4f13.1!3m3!1m2!1s0x0%3A0x0!2zM!5e0'
    '!3m2!1sen!2sid!4v1700000000000!5m2!1sen!2sid'
)
SEARCH_URL = 'https://www.google.com/maps/search/{query}'


def embed_url(lat, lng):
    """Map embed URL centered on the given coordinates"""
    return EMBED_URL.format(lat=lat, lng=lng)


def search_url(query):
    """External map search URL, or None for an empty query"""
    if not query:
        return None
    return SEARCH_URL.format(query=quote(query, safe=''))


class LocationPicker:
    """
    Coordinate fields plus the map modal's draft state

    Args:
        latitude (str): applied latitude, may be empty
        longitude (str): applied longitude, may be empty
        on_change (callable): called with ``(latitude, longitude)`` each
            time the applied coordinates change
    """

    def __init__(self, latitude='', longitude='', on_change=None):
        self.latitude = latitude or ''
        self.longitude = longitude or ''
        self.on_change = on_change
        self.is_open = False
        self.draft_latitude, self.draft_longitude = self.current
        self.alert = None

    @property
    def current(self):
        return (self.latitude or DEFAULT_LATITUDE, self.longitude or DEFAULT_LONGITUDE)

    @property
    def preview_url(self):
        return embed_url(*self.current)

    @property
    def draft_url(self):
        return embed_url(self.draft_latitude, self.draft_longitude)

    @property
    def selected_preset(self):
        for preset in PRESET_LOCATIONS:
            if (preset['lat'], preset['lng']) == (self.draft_latitude, self.draft_longitude):
                return preset['name']
        return None

    def set_coordinates(self, latitude, longitude):
        """Manual coordinate inputs outside the modal apply immediately"""
        self.latitude, self.longitude = latitude, longitude
        self._emit()

    def open(self):
        self.is_open = True
        self.draft_latitude, self.draft_longitude = self.current
        self.alert = None

    def set_draft(self, latitude=None, longitude=None):
        if latitude is not None:
            self.draft_latitude = latitude
        if longitude is not None:
            self.draft_longitude = longitude

    def choose_preset(self, name):
        for preset in PRESET_LOCATIONS:
            if preset['name'] == name:
                self.set_draft(preset['lat'], preset['lng'])
                return
        raise KeyError(name)

    def use_current_position(self, coords=None, error=None, supported=True):
        """
        Take a position reported by the platform geolocation API

        Args:
            coords (tuple): ``(latitude, longitude)`` floats on success
            error (str): error reported instead of coordinates
            supported (bool): False when the platform has no geolocation
        """
        if not supported:
            self.alert = GEOLOCATION_UNSUPPORTED
            return False
        if error or coords is None:
            logger.warning(f"Geolocation error: {error}")
            self.alert = GEOLOCATION_FAILED
            return False
        latitude, longitude = coords
        self.set_draft(f"{float(latitude):.6f}", f"{float(longitude):.6f}")
        self.alert = None
        return True

    def dismiss_alert(self):
        self.alert = None

    def apply(self):
        self.latitude, self.longitude = self.draft_latitude, self.draft_longitude
        self.is_open = False
        self._emit()

    def cancel(self):
        self.is_open = False
        self.draft_latitude, self.draft_longitude = self.current
        self.alert = None

    def _emit(self):
        if self.on_change is not None:
            self.on_change(self.latitude, self.longitude)

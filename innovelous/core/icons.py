"""
Icon Registry
=============

Fixed set of icon identifiers that categories and services may reference.
Names are validated when data is entered; anything unknown resolves to the
default grid icon instead of failing when a page renders.
"""

import re
from enum import Enum


class Icon(Enum):
    CPU = 'Cpu'
    BRAIN = 'Brain'
    WIFI = 'Wifi'
    CODE = 'Code'
    SMARTPHONE = 'Smartphone'
    SETTINGS = 'Settings'
    PALETTE = 'Palette'
    MONITOR = 'Monitor'
    DATABASE = 'Database'
    CLOUD = 'Cloud'
    SHIELD = 'Shield'
    ZAP = 'Zap'
    GLOBE = 'Globe'
    LAPTOP = 'Laptop'
    TABLET = 'Tablet'
    WATCH = 'Watch'
    HEADPHONES = 'Headphones'
    CAMERA = 'Camera'
    SERVER = 'Server'
    GRID = 'Grid3X3'
    TV = 'Tv'
    PHONE = 'Phone'
    MAP_PIN = 'MapPin'
    CALENDAR = 'Calendar'
    SEARCH = 'Search'
    USER = 'User'
    HEART = 'Heart'
    BELL = 'Bell'
    FOLDER = 'Folder'
    FILE_TEXT = 'FileText'

    @property
    def slug(self):
        """Kebab-case name used by the front-end icon font"""
        return _SLUG_OVERRIDES.get(self.value) or re.sub(r'(?<!^)(?=[A-Z])', '-', self.value).lower()


DEFAULT_ICON = Icon.GRID

_SLUG_OVERRIDES = {'Grid3X3': 'grid-3x3'}

_BY_NAME = {icon.value.lower(): icon for icon in Icon}


def resolve_icon(name):
    """Return the Icon for *name* (case-insensitive), or the default"""
    if isinstance(name, Icon):
        return name
    if not name:
        return DEFAULT_ICON
    return _BY_NAME.get(str(name).strip().lower(), DEFAULT_ICON)


def is_known_icon(name):
    return bool(name) and str(name).strip().lower() in _BY_NAME


def icon_choices():
    """(value, label) pairs for select inputs"""
    return [(icon.value, icon.value) for icon in Icon]

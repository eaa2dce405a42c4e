"""Fixed budgets and thresholds shared by the reading-session components."""

# Content units per page when asking the renderer to paginate.
LOCATIONS_PER_PAGE_BUDGET = 1200

# Leading-edge resize debounce window.
RESIZE_DEBOUNCE_MS = 500

# A touch counts as a tap only when it is shorter and stiller than this.
TAP_MAX_DURATION_MS = 300
TAP_MAX_MOVEMENT_PX = 4

# Surfaces at or below this width use touch navigation instead of edge zones.
NARROW_VIEWPORT_MAX_WIDTH = 650

# Fraction of the surface width covered by each pointer click zone.
POINTER_ZONE_FRACTION = 0.15

LOCATIONS_KEY_SUFFIX = "-locations"
CURRENT_LOCATION_KEY_SUFFIX = "-current-location"
SETTINGS_KEY = "reader-settings"

# Persisted placeholders that mean "no saved position".
ABSENT_LOCATOR_VALUES = frozenset({"", "null", "undefined", "None"})


def locations_key(content_hash: str) -> str:
    return f"{content_hash}{LOCATIONS_KEY_SUFFIX}"


def current_location_key(content_hash: str) -> str:
    return f"{content_hash}{CURRENT_LOCATION_KEY_SUFFIX}"

"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

CLASS_IDS = ("Class 1", "Class 2", "Class 3", "Class 4")
DEFAULT_CLASS_ID = "Class 1"

# Curriculum units offered by the student form.
LESSONS = (
    "Long Stick",
    "Middle Stick",
    "Sword",
    "Double Stick",
    "Surul",
    "Valari",
    "Fight",
    "Kalyana Varisi",
    "Ball",
    "Kalladi Varisi",
    "Vel Kambu",
    "Others",
)
DEFAULT_LESSON = "Long Stick"

DATE_KEY_FORMAT = "%Y-%m-%d"
MONTH_KEY_FORMAT = "%Y-%m"

DEFAULT_BULK_MAX_WORKERS = 8

# Bounds of the server-side query cache
DEFAULT_QUERY_CACHE_MAXSIZE = 256
DEFAULT_QUERY_CACHE_TTL_SECONDS = 30.0

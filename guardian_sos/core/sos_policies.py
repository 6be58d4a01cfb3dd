"""SOS session policy constants."""

from __future__ import annotations

# Random bytes behind each share token (rendered as 2x hex chars)
SHARE_TOKEN_BYTES = 16

# Reason recorded when a session is ended without one
DEFAULT_END_REASON = "unknown"

# Map link embedded in the alert SMS
MAPS_URL_TEMPLATE = "https://maps.google.com/?q={latitude},{longitude}"

# Path of the observer page, relative to the public base URL
LIVE_PAGE_PATH = "/live/{token}"

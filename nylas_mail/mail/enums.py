from __future__ import annotations

from enum import Enum


class Fields(str, Enum):
    """Field sets the messages endpoints accept in the `fields` query parameter."""

    STANDARD = "standard"
    INCLUDE_HEADERS = "include_headers"
    INCLUDE_TRACKING_OPTIONS = "include_tracking_options"
    RAW_MIME = "raw_mime"

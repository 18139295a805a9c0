"""Small pure helpers shared by the data model and provider bindings."""

from .mime import guess_mime_type, is_data_url, parse_data_url, sniff_mime_type

__all__ = ["guess_mime_type", "is_data_url", "parse_data_url", "sniff_mime_type"]

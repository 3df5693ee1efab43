"""
Stream pipeline components for the Live Voice Relay system.

This package wraps the two external tools the relay drives:
- the resolver, which turns a page URL into a direct media URL
- the transcoder, which decodes that URL into raw PCM
plus the parser for the expiry embedded in resolved URLs.
"""

from .expiry import get_expiry_from_url, is_url_fresh
from .resolver import StreamResolver
from .transcoder import TranscodeProcess, Transcoder

__all__ = [
    "get_expiry_from_url",
    "is_url_fresh",
    "StreamResolver",
    "TranscodeProcess",
    "Transcoder",
]

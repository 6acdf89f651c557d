"""HLS playlist rendering."""

from .m3u8 import PlaylistSerializer, clip_url

__all__ = ["PlaylistSerializer", "clip_url"]

"""Soundshare: music-sharing backend with accounts, song uploads and playlists."""

__version__ = "0.1.0"

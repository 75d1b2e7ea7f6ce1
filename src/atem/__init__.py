"""atem - fit a video under a target size with a two-pass ffmpeg encode."""

__version__ = "0.1.0"

"""Ray-cast shooter engine core: codec, keys, audio, video, palette, tiles, doors and movement."""

__version__ = "0.1.0"

__all__ = [
    "audio",
    "codec",
    "doors",
    "keys",
    "movement",
    "palette",
    "tiles",
    "video",
]
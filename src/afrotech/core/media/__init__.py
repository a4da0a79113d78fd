from .client import MediaClient, MediaError

__all__ = ["MediaClient", "MediaError"]

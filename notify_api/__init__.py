"""Firebase Realtime Database notification API."""

__version__ = "1.0.0"

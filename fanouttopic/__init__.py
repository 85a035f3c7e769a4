"""Thread-safe buffering publish-subscribe topics with dynamic fanout."""

__version__ = "0.1.0"
__all__ = ["topic"]
"""In-memory CAN bus mock: frames, ID/mask filters, a bus and endpoints for tests."""

__version__ = "0.1.0"
__all__ = ["bus", "can", "filter", "frame"]
"""Core content, rendering and API client modules."""

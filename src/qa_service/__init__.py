"""Questions & answers service."""

"""HTTP wrapper around the resolution API."""

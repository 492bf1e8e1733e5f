"""Image loading and export helpers."""

"""Drag-and-swap tile puzzle built from an image."""

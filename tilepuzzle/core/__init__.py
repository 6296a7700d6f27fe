"""Puzzle domain model and grid state."""

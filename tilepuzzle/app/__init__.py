"""Puzzle session wiring, drag handling, and presentation helpers."""

"""Runtime primitives shared by the puzzle app."""

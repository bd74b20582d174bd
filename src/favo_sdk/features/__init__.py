"""Feature clients built on the shared transport."""

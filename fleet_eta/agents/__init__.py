"""Chat assistant that answers ETA questions."""

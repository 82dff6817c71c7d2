"""Selection and session state."""

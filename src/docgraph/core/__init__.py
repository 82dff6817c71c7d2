"""Core data types, errors and the result type."""

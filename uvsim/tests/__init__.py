"""uvsim test suite."""

"""Server lifecycle."""

"""Demo HTTP API built on the jsonhttp helpers."""

"""Provider-boundary parsing helpers."""

"""Quote request lifecycle (draft, publish)."""

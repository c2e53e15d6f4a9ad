"""File renderers, one module per feature group."""

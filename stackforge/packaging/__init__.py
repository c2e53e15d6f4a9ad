"""Archive packaging for generated scaffolds."""

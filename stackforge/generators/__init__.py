"""Scaffold generation: rendering, directory planning and documentation."""

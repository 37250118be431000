"""Endpoint modules for the user service. Internal; may change at any time."""

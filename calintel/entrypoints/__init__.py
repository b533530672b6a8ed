"""Priced agent entrypoints, registered on import."""

"""Save file storage layer.

This module persists keyed, typed records into flat binary save files.
It powers path resolution, record mutation, and the typed SDK.
"""

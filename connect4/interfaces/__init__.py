"""
connect4.interfaces - User interfaces for Connect Four

This package contains the presentation layers that drive the engine.
"""

# Don't import anything here to avoid circular imports
__all__ = []

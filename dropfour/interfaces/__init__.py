"""
dropfour.interfaces - User interfaces for dropfour

This package contains the setup form and the command-line front end.
"""

# Don't import anything here to avoid circular imports
__all__ = []

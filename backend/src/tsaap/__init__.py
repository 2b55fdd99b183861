"""
Tsaap Notes Backend - annotated notes on discussion contexts

Services for note creation, tagging, mentions, bookmarks and user accounts.

Version: 1.0.0
"""

__version__ = "1.0.0"

"""
Service layer for URL-to-MP3 conversion.

These functions are independent of Django requests and are used by:
- The web views (audio/views.py)
- The CLI management command (management/commands/fetch.py)
"""

"""
wikimasters.services

Service layer.

Responsibilities:
- Own transactions and authorization for article writes.
- Coordinate the cache, the store and background notifications.
"""

# Package marker.

"""
wikimasters.api

API package for the Wikimasters service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring.
"""

# Package marker.

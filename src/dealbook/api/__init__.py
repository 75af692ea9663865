"""
dealbook.api

API package for the dealbook service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: auth + mapping + one gateway call per route.

"""
dealbook.auth

Authentication package.

Responsibilities:
- Identity provider client (bearer token -> user payload).
- FastAPI auth dependencies producing a typed `Principal`.
"""

# Package marker.

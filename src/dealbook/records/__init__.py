"""
dealbook.records

Record shapes and request-to-record mapping.
"""

# Package marker.

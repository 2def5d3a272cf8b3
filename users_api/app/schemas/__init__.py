"""
Pydantic schema definitions for API payloads.

Schemas double as the domain record passed between the service and the
repositories, which keeps the user shape defined in exactly one place.
"""

"""
Pydantic schema definitions for API payloads.

Schemas are separated from the stores so that the wire representation
(hyphenated keys, ISO timestamps) is decided in one place.
"""

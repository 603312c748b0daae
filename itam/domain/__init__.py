"""Domain layer: entities, value objects, policies, enums, and exceptions.

Pure domain models; no ORM, HTTP, or persistence concerns.
"""

"""Application layer: use-case services, DTOs and repository ports."""

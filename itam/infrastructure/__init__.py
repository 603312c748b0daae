"""Infrastructure layer: record stores and the RBAC seed."""

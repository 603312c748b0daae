"""Authorization core for the IT asset management service.

Permission catalog, role definitions, permission resolution, scope
checks, and the per-operation decision pipeline.
"""

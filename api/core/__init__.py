"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks every feature uses (DB wiring,
settings, the response envelope). Keep feature-specific SQL and business
logic in the corresponding feature package (e.g. `sightings/`).
"""

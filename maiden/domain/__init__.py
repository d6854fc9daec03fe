"""Domain layer (pure logic).

- Keep game rules, badge composition and flavor tables here.
- Avoid I/O: no Redis, no HTTP/FastAPI, no files.
- Prefer deterministic functions (dates and randomness passed in as arguments).
"""

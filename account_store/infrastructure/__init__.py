"""Infrastructure Layer — connection pool, SQL repository, hashing and logging.

Invariants:
    - Infrastructure never raises raw driver exceptions past its boundary
    - All store failures mapped to StoreUnavailableError (core/errors.py)
"""

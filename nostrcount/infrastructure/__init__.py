"""Infrastructure Layer: relay access and cross-cutting concerns.

Invariants:
    - Relay failures mapped to core/errors.py types before reaching services
"""

"""Services Layer: async orchestration between relays and the pure core.

Invariants:
    - Services fetch and publish; every interpretation of records happens in core/
    - Relay errors propagate as core/errors.py types, record errors never surface
"""

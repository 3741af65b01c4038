"""NostrCount Application Package: days-since / days-until counters on Nostr.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

"""Core Layer: pure record interpretation, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/ or schemas/
    - All functions are pure and deterministic (the current date is always a parameter)

Design Decisions:
    - Functional core separated from imperative shell: services fetch records,
      core turns them into counters
"""

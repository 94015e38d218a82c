"""Core Layer — pure session logic, no IO.

Invariants:
    - No module in core/ imports from services/, infrastructure/, db/ or models/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: IO lives in infrastructure/,
      orchestration in services/
"""

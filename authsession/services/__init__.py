"""Services Layer — the session state machine and its orchestration of IO.

Invariants:
    - Services call infrastructure only through core/repository_protocols.py types
    - No service raises AuthSessionError to its caller
"""

"""authsession — client-side authentication session state.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: consumers import from the owning module explicitly
"""

"""Services Layer — read-modify-write stores over the remote documents.

Invariants:
    - One read and at most one write per operation
    - Mutation logic delegated to pure core functions

Design Decisions:
    - Stores receive their DocumentClient by injection (no module-level config)
"""

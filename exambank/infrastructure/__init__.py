"""Infrastructure Layer — remote document clients and cross-cutting concerns.

Invariants:
    - Every remote failure is mapped to a core/errors.py type before leaving this layer
    - No client retries on its own; callers decide

Design Decisions:
    - One client per backend behind the DocumentClient protocol
"""

"""Core Layer — pure domain logic, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Functions are pure; randomness is injected through an rng parameter

Design Decisions:
    - Functional core separated from imperative shell: stores read, call core, write
"""

"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (PokeAPI over HTTP,
    filesystem and in-memory state stores) used by loaders.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by ``pokedex.app.controller`` for runtime wiring and by tests for
    transport-level behavior verification.
"""

"""Use-case layer sitting between adapters and view models.

Modules here classify adapter failures and persist restorable UI state
without performing transport I/O directly.
"""

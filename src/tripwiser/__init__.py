"""
Core business logic package for Tripwiser.

Balance settlement, fund tracking and currency conversion live here.
Lambda handlers in src/handlers/ are thin wrappers that call into tripwiser/.
"""

__all__: list[str] = []

"""Valkey REST Gateway - key-value store exposed over HTTP.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Only the version lives here: explicit imports everywhere else, no star exports
"""

__version__ = "1.0.0"

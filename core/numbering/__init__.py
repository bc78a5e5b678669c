"""
Pyramid Books Numbering
=======================
Human-readable sequential document numbers with periodic reset.

Models are not re-exported here; import them from core.numbering.models
once the app registry is ready.
"""

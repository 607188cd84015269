"""
utils/ - Shared Helpers
=======================
Logging setup and text formatting used across layers.
"""

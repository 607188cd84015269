"""
models/ - Domain Models
=======================
Plain dataclasses carried between layers. No database or Telegram imports here.
"""

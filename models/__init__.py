"""
models/ - Domain Models
=======================
Plain dataclasses, one per database table. Relationships are carried as
foreign-key ids; resolving an associated record is a separate lookup.
"""

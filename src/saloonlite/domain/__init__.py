"""Domain layer for saloonlite application.

Services live in their own modules (``saloonlite.domain.transaction`` and so on)
and are imported from there, which keeps this package free of import cycles
with ``saloonlite.database``.
"""

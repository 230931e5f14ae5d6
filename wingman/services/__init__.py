"""
Use cases built on the persistence layer.

Each service orchestrates ``Storage`` collections for one screen family
(exercise catalog, journal, journeys). Sorting and lookups done here are
presentation-only and never written back.
"""


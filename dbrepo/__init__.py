"""dbrepo - database schema to repository model.

Introspects tables, columns and foreign keys of a relational database
and builds the repository model used by the code generator.
"""

__version__ = "0.1.0"

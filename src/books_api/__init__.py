"""Books API.

CRUD service over a single ``books`` table with schema-validated writes.
"""

__version__ = "0.1.0"

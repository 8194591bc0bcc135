"""User API: CRUD and paginated search over users stored in MongoDB."""

__version__ = "0.1.0"

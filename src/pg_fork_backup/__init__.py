"""Fork a production Postgres database, back it up, and tear the fork down."""

__version__ = "0.1.0"

__all__ = ["__version__"]

"""Version information for json_schema_refs."""

__version__ = "0.1.0"

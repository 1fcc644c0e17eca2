"""End-of-life lookups for packages and Linux distributions: distro helpers, EOL records, matches and database listings."""

__version__ = "0.1.0"

__all__ = [
    "distro",
    "eol",
    "events",
    "listing",
    "match",
    "metadata",
    "nullable",
    "provider",
]
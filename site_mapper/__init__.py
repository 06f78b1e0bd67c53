"""
SiteMapper package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

from site_mapper.cli import cli  # noqa: E402

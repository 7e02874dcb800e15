"""Wine Journal - wine tasting journal and cellar management API."""

__version__ = "0.4.0"

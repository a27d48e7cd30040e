"""Digital footprint checker: breach, reputation and discovery aggregation."""

__version__ = "1.0.0"

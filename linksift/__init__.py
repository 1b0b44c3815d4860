"""linksift: keep only the generated links that actually resolve."""

__version__ = "0.1.0"

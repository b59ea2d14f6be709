"""URL checker: batch HTTP status probing with SEO metadata."""

__version__ = "0.1.0"

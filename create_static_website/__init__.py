"""create-static-website -- interactive scaffolding for static websites."""

__version__ = "0.1.0"

"""Review machine-generated validation findings page by page."""

__version__ = "0.1.0"

"""Baseball career statistics: import, listing, editing and narrative descriptions."""

__version__ = "0.1.0"

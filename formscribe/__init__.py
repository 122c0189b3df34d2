"""Natural-language form filling: extract, merge and diff form field values."""

__version__ = "0.1.0"

"""Command-line interface (``research-connect``)."""

"""Command-line tools for station datasets."""

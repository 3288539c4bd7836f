"""Console and CSV rendering of coordinate reports."""

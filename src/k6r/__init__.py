"""k6r -- convert k6 load-test results into Markdown reports."""

__version__ = "0.1.0"

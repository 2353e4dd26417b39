"""filepipe — run file-only commands inside shell pipelines."""

__version__ = "0.1.0"

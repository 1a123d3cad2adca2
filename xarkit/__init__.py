"""Building blocks for the xar archive format: header, TOC, options, data and encodings."""

__version__ = "1.7.0"
__all__ = ["base64", "bzip", "data", "errors", "header", "options", "paths", "toc"]
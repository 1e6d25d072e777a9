"""PDF object values, ToUnicode CMaps, PNG predictors, PDF dates and page-range helpers."""

__version__ = "0.1.0"
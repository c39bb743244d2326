"""Estimate the transfer size of a web page and its embedded resources."""

__version__ = "0.1.0"

"""Read-only administrative API over the chat platform's relational store."""

__version__ = "0.1.0"

"""Invoicing building blocks: invoice numbering, working days, exchange rates, data files and Typst data."""

__version__ = "0.1.12"
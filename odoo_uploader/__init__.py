"""Batch image uploader for Odoo document folders."""

__version__ = "0.1.0"

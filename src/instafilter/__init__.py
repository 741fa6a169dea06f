"""Instafilter: one intensity slider driving a catalog of image filters."""

from __future__ import annotations

__version__ = "0.1.0"

"""Detector adapters package.

Adapters provide a small, stable contract so batch scans can turn catalog
matches into located evidence (path, byte offset, rule) without depending
on how the inputs were collected.
"""

from .adapter import BaseAdapter, Detection, SignatureAdapter

__all__ = ["BaseAdapter", "Detection", "SignatureAdapter"]

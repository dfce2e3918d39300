"""Checksums, cryptographic hashes, HMACs and PE import-table parsing."""

__version__ = "0.1.0"
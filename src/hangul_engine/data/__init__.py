"""Packaged hanja and symbol tables."""

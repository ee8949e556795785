"""Helpers shared by the codecs."""

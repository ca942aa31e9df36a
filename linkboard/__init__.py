"""Linkboard: a small link and discussion board."""

"""Parsing helpers for the RDML tree builder."""

from rdml.parsing.token_nav import TokenNavigationMixin

__all__ = ["TokenNavigationMixin"]

"""Readers that produce declaration nodes from source text."""

from __future__ import annotations

from .tree_sitter import TREE_SITTER_AVAILABLE, RustDeclarationReader

__all__ = ["RustDeclarationReader", "TREE_SITTER_AVAILABLE"]

"""Metadata registry for off-chain files."""

"""Workspace configuration loading."""

"""Workflow nodes, one per named step."""

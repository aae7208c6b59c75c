"""Workflow graph, state, and step runners."""

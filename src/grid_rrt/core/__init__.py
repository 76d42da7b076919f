"""Workspace, tree and planner base types."""

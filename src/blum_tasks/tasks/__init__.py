"""Earn-tasks catalog traversal and start/claim lifecycle."""

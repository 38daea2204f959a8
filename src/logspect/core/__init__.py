"""Matching and diagnostic rendering for captured log entries."""

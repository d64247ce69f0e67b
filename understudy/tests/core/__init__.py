"""Unit tests for the Understudy core engine."""

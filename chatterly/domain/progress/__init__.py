"""Derived learning-progress metrics."""

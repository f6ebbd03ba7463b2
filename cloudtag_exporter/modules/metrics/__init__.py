"""Materialization of tagged resources into info metrics."""

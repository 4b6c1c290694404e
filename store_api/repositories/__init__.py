"""Data access helpers over the ORM models."""

"""Entities organised by business concept.

Each aggregate has its own package holding the domain model (entity.py),
its database rows (table.py) and its data access (repository.py).
"""

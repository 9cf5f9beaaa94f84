"""
Database package: SQLAlchemy models and repository implementations.
"""

"""
Application layer: use cases, services and interfaces.
"""

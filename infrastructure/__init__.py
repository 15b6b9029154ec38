"""
Infrastructure Package
======================

Provides abstraction layers for external dependencies following the Dependency Inversion Principle.

Modules:
    - storage: Image storage abstraction (Django storage backends, in-memory)
    - container: Service locator for the domain services

This package enables:
    - Easy testing with in-memory implementations
    - Switching between providers without code changes
"""

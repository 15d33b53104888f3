"""Test suite for cueline.

Test Structure:
- unit/: Unit tests for individual components
  - ordering/: Canonical order, reindexing, move and insert
  - config/: Config file loading and validation
  - utils/: Logging helpers
  - cli/: Command-line entry point
- conftest.py: Shared fixtures and item factories
"""

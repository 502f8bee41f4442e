"""Test suite for buildplan.

Test organization:
- fixtures/: Plugin stand-ins and descriptor builders
- unit/: Unit tests for individual compiler stages, config, CLI

Run tests with:
    pytest tests/
    pytest tests/unit/
    pytest tests/ -v --tb=short
"""

"""
Tests Package - Unit and integration tests for CourseMap.
=========================================================

Test modules:
- test_extraction: Archive, manifest, counting, discovery, pipeline tests
- test_scoring: Compliance status and score tests
- test_schemas: Data model, document persistence and configuration tests
- test_cli: Command-line interface tests

Run tests with:
    pytest tests/
    pytest tests/ -v --cov=src/coursemap
"""

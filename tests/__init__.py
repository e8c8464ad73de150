"""
Unit Tests for Gambit

This package contains unit tests for all engine components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_rules.py

    # Run with coverage
    pytest tests/ --cov=gambit --cov-report=html

    # Run specific test
    pytest tests/test_rules.py::TestCastling::test_kingside_castling

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
    - chess (python-chess): Independent reference for legal move sets
"""

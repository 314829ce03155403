"""
Test suite for the cruise map webhook service.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_sailing_service.py -v
"""

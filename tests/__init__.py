"""
Test suite for the exact fraction library

Contains:
- tests/unit/          : Unit tests for individual modules
"""

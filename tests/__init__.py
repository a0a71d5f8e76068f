"""
Test suite for persian-datemath

Contains:
- tests/unit/          : Unit tests for individual modules
"""

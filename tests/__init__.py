"""
Test suite for stagesale

Contains:
- tests/unit/          : Unit tests for individual modules and the sale facade
"""

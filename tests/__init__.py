"""Test suite package marker."""

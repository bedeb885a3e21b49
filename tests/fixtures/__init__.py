"""Test fixtures for merkledrop tests."""

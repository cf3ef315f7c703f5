"""Shared mock payloads for the unit tests."""

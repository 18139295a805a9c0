"""Fixture data for the mock provider (package data)."""

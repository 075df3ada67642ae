"""Shared test fixtures for nom."""

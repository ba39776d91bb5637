"""Shared utilities: environment loading, constants, logging and URL helpers."""

"""Persistence adapters for the address book."""

"""Utility modules for makeimage."""

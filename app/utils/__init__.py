"""
Utilities Package

Helper functions used across the application:
- dates.py: Normalise date inputs to calendar dates
"""

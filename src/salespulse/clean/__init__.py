"""Cleaning utilities.

Resolves each logical field of a sales record through its alias chain,
coerces values to numbers and dates, and converts records into typed rows.
"""

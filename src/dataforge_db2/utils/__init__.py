"""
Utilities - Credentials and connection error formatting
"""

"""
API Package
"""

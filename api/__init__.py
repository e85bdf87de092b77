"""
REST API package.
"""

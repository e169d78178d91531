"""
HTTP API for the matching service.
"""

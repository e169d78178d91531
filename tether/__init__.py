"""
Tether: community mental-health resource matching.
"""

__version__ = "0.1.0"

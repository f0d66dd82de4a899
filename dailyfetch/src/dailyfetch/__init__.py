"""
dailyfetch: fetch-normalize-fallback wrappers for daily content APIs.
"""

__version__ = "0.1.0"

"""
Shared utilities.

- http.py - requests session with a default timeout and retries disabled
"""

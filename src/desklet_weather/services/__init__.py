"""
Shared infrastructure used by every driver.

- http.py - retrying ``requests`` session and the async ``HttpFetcher``
"""

"""
Client Package

HTTP client for the game server and the terminal front end.
"""

from .api_client import WordleApiClient

__all__ = ['WordleApiClient']

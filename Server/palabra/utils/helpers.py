"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional

from flask import request


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract user identity information from request."""
    if request_obj is None:
        request_obj = request

    return {
        'user_ip': request_obj.remote_addr or 'unknown',
        'session_id': None
    }

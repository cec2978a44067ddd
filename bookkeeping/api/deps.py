"""
Shared request dependencies.
"""

from fastapi import Header


def get_actor(x_user_id: str | None = Header(default=None)) -> str | None:
    """
    Identify the user making the request.

    Authentication happens in front of this service; the caller
    passes the user id through so it lands on the audit fields.
    """
    return x_user_id

"""
Shared column helpers for the models package.
"""

import uuid


def new_id():
    return str(uuid.uuid4())


def isoformat(value):
    return value.isoformat() if value is not None else None

"""
Custom Validators
=================

Custom validation functions untuk business rules
"""

import re

PHONE_PATTERN = re.compile(r'^[0-9+\-\s()]+$')


def validate_phone_number(value: str) -> str:
    """Validate phone number: digits, spaces, +, -, and parentheses"""
    if value and not PHONE_PATTERN.match(value):
        raise ValueError('Invalid phone number format')
    return value


"""Validation utilities for short links."""

import re
from urllib.parse import urlsplit
from typing import Tuple, Optional, Union

MAX_URL_LENGTH = 2048

# 100 years
MAX_VALIDITY_MINUTES = 100 * 365 * 24 * 60

SHORT_CODE_PATTERN = re.compile(r'^[a-zA-Z0-9_-]{3,20}$')
SCHEME_PATTERN = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.-]*$')
VALIDITY_PATTERN = re.compile(r'^[0-9]+$')

# Schemes that are meaningless without a host part
HOST_SCHEMES = {"http", "https", "ftp", "ftps", "ws", "wss"}


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate an absolute URL.
    
    Any scheme is accepted, but web schemes must carry a host.
    
    Args:
        url: The URL to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"
    
    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"
    
    if any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"
    
    try:
        result = urlsplit(url)
        # Accessing port validates it (raises ValueError when out of range)
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"
    
    if not result.scheme or not SCHEME_PATTERN.match(result.scheme):
        return False, "URL must be absolute (e.g. https://example.com)"
    
    if result.scheme.lower() in HOST_SCHEMES:
        if not result.hostname:
            return False, "URL must have a valid domain"
    elif not (result.netloc or result.path):
        return False, "URL is missing everything after the scheme"
    
    return True, ""


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Validate a custom short code.
    
    Args:
        short_code: The short code to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"
    
    if not SHORT_CODE_PATTERN.match(short_code):
        return False, "shortcode must be 3-20 [A-Za-z0-9_-]"
    
    return True, ""


def is_valid_validity(validity: Optional[Union[str, int]]) -> Tuple[bool, str]:
    """Validate a validity period given in minutes.
    
    Empty input is valid (the caller applies its default). Periods longer
    than MAX_VALIDITY_MINUTES are rejected so expiry instants stay
    representable as datetimes.
    
    Returns:
        Tuple of (is_valid, error_message)
    """
    if validity is None or validity == "":
        return True, ""
    
    if isinstance(validity, bool):
        return False, "validity must be positive minutes"
    
    if isinstance(validity, int):
        if validity <= 0:
            return False, "validity must be positive minutes"
        if validity > MAX_VALIDITY_MINUTES:
            return False, f"validity must be at most {MAX_VALIDITY_MINUTES} minutes"
        return True, ""
    
    if not isinstance(validity, str):
        return False, "validity must be positive minutes"
    
    text = validity.strip()
    
    if not VALIDITY_PATTERN.match(text):
        return False, "validity must be positive minutes"
    
    digits = text.lstrip("0")
    if not digits:
        return False, "validity must be positive minutes"
    
    # Compare digit counts first so huge inputs never reach int()
    if len(digits) > len(str(MAX_VALIDITY_MINUTES)) or int(digits) > MAX_VALIDITY_MINUTES:
        return False, f"validity must be at most {MAX_VALIDITY_MINUTES} minutes"
    
    return True, ""

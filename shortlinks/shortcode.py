"""Short code generation and input validation."""

import random
import string
from typing import Optional, Union

from .common.validators import is_valid_url, is_valid_short_code, is_valid_validity
from .errors import InvalidUrl, InvalidValidity, InvalidCodeFormat

DEFAULT_VALIDITY_MINUTES = 30


class ShortCodeGenerator:
    """Generate candidate short codes and validate link request fields."""
    
    # Base36 characters (lowercase alphanumeric)
    BASE36_CHARS = string.digits + string.ascii_lowercase  # 0-9a-z
    
    def __init__(
        self,
        default_length: int = 6,
        default_validity: int = DEFAULT_VALIDITY_MINUTES,
        rng: Optional[random.Random] = None,
    ):
        """Initialize short code generator.
        
        Args:
            default_length: Length of generated codes
            default_validity: Validity in minutes used when none is given
            rng: Optional random source (a private random.Random if not given)
        """
        self.default_length = default_length
        self.default_validity = default_validity
        self.rng = rng or random.Random()
    
    def random_code(self) -> str:
        """Generate a random short code.
        
        Codes are drawn uniformly from the base36 alphabet and are not
        guaranteed to be unique; the caller checks them against the store.
        
        Returns:
            Random short code
        """
        return ''.join(self.rng.choices(self.BASE36_CHARS, k=self.default_length))
    
    def validate_custom_code(self, candidate: str) -> str:
        """Validate a user supplied short code.
        
        Raises:
            InvalidCodeFormat: If the code is not 3-20 of [A-Za-z0-9_-]
        """
        is_valid, error = is_valid_short_code(candidate)
        if not is_valid:
            raise InvalidCodeFormat(error)
        return candidate
    
    def validate_url(self, candidate: str) -> str:
        """Validate the URL to shorten.
        
        Raises:
            InvalidUrl: If the candidate is not an absolute URL
        """
        is_valid, error = is_valid_url(candidate)
        if not is_valid:
            raise InvalidUrl(f"invalid URL ({error})")
        return candidate
    
    def validate_validity(self, candidate: Optional[Union[str, int]]) -> int:
        """Validate a validity period in minutes.
        
        Args:
            candidate: Positive integer (or its string form); empty means default
            
        Returns:
            Validity in minutes
            
        Raises:
            InvalidValidity: If the candidate is not a positive integer or
                exceeds MAX_VALIDITY_MINUTES
        """
        is_valid, error = is_valid_validity(candidate)
        if not is_valid:
            raise InvalidValidity(error)
        if candidate is None or candidate == "":
            return self.default_validity
        return int(str(candidate).strip())

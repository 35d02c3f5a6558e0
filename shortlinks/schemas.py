"""Pydantic models for link creation requests."""

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator


class LinkRequest(BaseModel):
    """One row of a batch shortening request.
    
    Fields are kept as entered; the registry validates them so that failures
    carry the row they came from.
    """
    
    url: str = Field(..., description="The URL to shorten")
    validity_minutes: Optional[Union[int, str]] = Field(
        None, description="Minutes the link stays valid (default 30)"
    )
    custom_code: Optional[str] = Field(None, description="Optional custom short code")
    
    @field_validator('url', mode='before')
    @classmethod
    def strip_url(cls, v):
        """Trim surrounding whitespace from the URL."""
        return v.strip() if isinstance(v, str) else v
    
    @field_validator('validity_minutes', 'custom_code', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        """Treat blank optional fields as not given."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "https://github.com/user/repo", "validity_minutes": 120, "custom_code": "myrepo"},
            ]
        }
    }

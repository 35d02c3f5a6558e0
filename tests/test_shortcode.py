"""Tests for short code generation and request validation."""

import random

import pytest

from shortlinks.errors import InvalidCodeFormat, InvalidUrl, InvalidValidity
from shortlinks.common.validators import MAX_VALIDITY_MINUTES
from shortlinks.shortcode import ShortCodeGenerator


class TestRandomCode:
    """Test random code generation."""
    
    def test_random_code_shape(self):
        """Generated codes are six lowercase base36 characters."""
        generator = ShortCodeGenerator()
        
        for _ in range(200):
            code = generator.random_code()
            assert len(code) == 6
            assert set(code) <= set("0123456789abcdefghijklmnopqrstuvwxyz")
    
    def test_random_code_custom_length(self):
        generator = ShortCodeGenerator(default_length=10)
        assert len(generator.random_code()) == 10
    
    def test_seeded_generator_is_deterministic(self):
        """Same seed, same sequence."""
        first = ShortCodeGenerator(rng=random.Random(42))
        second = ShortCodeGenerator(rng=random.Random(42))
        
        assert [first.random_code() for _ in range(5)] == [second.random_code() for _ in range(5)]
    
    def test_random_codes_pass_custom_code_validation(self):
        generator = ShortCodeGenerator()
        code = generator.random_code()
        assert generator.validate_custom_code(code) == code


class TestCustomCodeValidation:
    """Test custom code validation."""
    
    @pytest.mark.parametrize("code", ["abc", "my-link", "My_Link_2024", "a" * 20])
    def test_valid_codes(self, code):
        assert ShortCodeGenerator().validate_custom_code(code) == code
    
    @pytest.mark.parametrize("code", ["ab", "a" * 21, "abc 123", "abc@123", "ünï", ""])
    def test_invalid_codes(self, code):
        with pytest.raises(InvalidCodeFormat) as exc:
            ShortCodeGenerator().validate_custom_code(code)
        assert exc.value.kind == "InvalidCodeFormat"


class TestUrlValidation:
    """Test URL validation."""
    
    @pytest.mark.parametrize("url", [
        "https://example.com",
        "http://example.com/path?query=value#frag",
        "https://sub.example.com:8080/path",
        "ftp://files.example.com/pub",
        "mailto:someone@example.com",
    ])
    def test_absolute_urls(self, url):
        assert ShortCodeGenerator().validate_url(url) == url
    
    @pytest.mark.parametrize("url", [
        "",
        "not-a-url",
        "example.com/path",
        "https://",
        "https://exa mple.com",
        "https://example.com:99999/",
        "https://" + "a" * 2050 + ".com",
    ])
    def test_rejected_urls(self, url):
        with pytest.raises(InvalidUrl):
            ShortCodeGenerator().validate_url(url)


class TestValidityValidation:
    """Test validity validation."""
    
    def test_empty_uses_default(self):
        generator = ShortCodeGenerator()
        assert generator.validate_validity(None) == 30
        assert generator.validate_validity("") == 30
    
    def test_configured_default(self):
        assert ShortCodeGenerator(default_validity=90).validate_validity(None) == 90
    
    @pytest.mark.parametrize("value, expected", [("45", 45), (" 15 ", 15), (1, 1), ("0010", 10)])
    def test_positive_integers(self, value, expected):
        assert ShortCodeGenerator().validate_validity(value) == expected
    
    @pytest.mark.parametrize("value", ["0", "-3", "abc", "1.5", "1e3", 0, -1, True])
    def test_rejected_values(self, value):
        with pytest.raises(InvalidValidity):
            ShortCodeGenerator().validate_validity(value)
    
    def test_longest_validity_accepted(self):
        generator = ShortCodeGenerator()
        assert generator.validate_validity(MAX_VALIDITY_MINUTES) == MAX_VALIDITY_MINUTES
        assert generator.validate_validity(str(MAX_VALIDITY_MINUTES)) == MAX_VALIDITY_MINUTES
    
    @pytest.mark.parametrize("value", [
        "9999999999",
        str(MAX_VALIDITY_MINUTES + 1),
        MAX_VALIDITY_MINUTES + 1,
        "9" * 5000,
        10 ** 5000,
    ], ids=["str-10-digits", "str-max-plus-1", "int-max-plus-1", "str-5000-nines", "int-10-pow-5000"])
    def test_too_long_validity(self, value):
        """Expiry must stay within the range a datetime can show."""
        with pytest.raises(InvalidValidity, match="at most"):
            ShortCodeGenerator().validate_validity(value)

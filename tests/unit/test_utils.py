"""
Unit tests for input hygiene utilities.
"""

import pytest

from commerce_validation.utils import ValidationError, sanitize_input, sanitize_string, validate_file_path


class TestSanitizeInput:
    """Tests for XSS stripping"""

    @pytest.mark.parametrize("value,expected", [
        ("hello<script>alert('x')</script>", "hello"),
        ("<SCRIPT type='text/javascript'>steal()</SCRIPT>ok", "ok"),
        ('<a href="javascript:run()">x</a>', "x"),
        ('<img src=x onerror="pwn()">', ""),
        ("<b>bold</b> <i>text</i>", "bold text"),
        ("plain text", "plain text"),
    ])
    def test_sanitize_string(self, value, expected):
        """Test script blocks and all other tags are removed"""
        assert sanitize_string(value) == expected

    @pytest.mark.parametrize("value", [
        "<scr<script>x</script>ipt>alert(1)</script>",
        "<script>alert(1)",
        "<<script>script>alert(1)<</script>/script>",
        "<svg/onload=alert(1)>",
    ])
    def test_no_tag_survives(self, value):
        """Test nested and unclosed script tags leave no markup behind"""
        result = sanitize_string(value)
        assert "<" not in result
        assert "onload=" not in result.lower()

    def test_scheme_and_handlers_in_text(self):
        """Test javascript: and inline handlers outside tags are removed"""
        assert sanitize_string("javascript:alert(1)") == "alert(1)"
        assert sanitize_string("x onclick=go()") == "x go()"

    def test_special_characters_are_escaped(self):
        """Test stray angle brackets and ampersands are escaped"""
        assert sanitize_string("Salt & Pepper") == "Salt &amp; Pepper"
        assert sanitize_string("1 < 2") == "1 &lt; 2"

    def test_nested_structures(self):
        """Test strings inside dicts and lists are sanitized recursively"""
        data = {
            "name": "Lamp<script>x()</script>",
            "tags": ["ok", "javascript:bad"],
            "meta": {"note": "<b onmouseover=evil()>hi</b>"},
            "stock": 5,
            "active": True,
        }

        assert sanitize_input(data) == {
            "name": "Lamp",
            "tags": ["ok", "bad"],
            "meta": {"note": "hi"},
            "stock": 5,
            "active": True,
        }

    def test_input_is_not_mutated(self):
        """Test the original payload is left untouched"""
        data = {"name": "<script>x</script>"}
        sanitize_input(data)
        assert data == {"name": "<script>x</script>"}

    def test_non_string_leaves(self):
        """Test scalars pass through unchanged"""
        assert sanitize_input(None) is None
        assert sanitize_input(3.5) == 3.5
        assert sanitize_input(("a", "javascript:b")) == ("a", "b")


class TestValidateFilePath:
    """Tests for file path validation"""

    def test_valid_path(self):
        """Test a normal path is returned stripped"""
        assert validate_file_path("  config/rules.yaml ") == "config/rules.yaml"

    @pytest.mark.parametrize("value,message", [
        ("", "non-empty string"),
        (None, "non-empty string"),
        ("   ", "whitespace-only"),
        ("../../etc/passwd", "path traversal"),
        ("rules\x00.yaml", "null bytes"),
        ("a" * 4097, "maximum length"),
    ])
    def test_invalid_paths(self, value, message):
        """Test unsafe or malformed paths are rejected"""
        with pytest.raises(ValidationError, match=message):
            validate_file_path(value)

    def test_field_name_in_message(self):
        """Test the field name is used in error messages"""
        with pytest.raises(ValidationError, match="rules"):
            validate_file_path("", "rules")

    def test_validation_error_is_value_error(self):
        """Test callers can catch ValueError"""
        assert issubclass(ValidationError, ValueError)

"""Tests for configuration and post-render formatting."""

import pydantic
import pytest

from zodgen.config import DEFAULT_CONFIG, create_config
from zodgen.errors import ConfigurationError
from zodgen.formatting import format_code, format_imports, format_indentation


class TestCreateConfig:
    def test_defaults(self):
        config = create_config()
        assert config == DEFAULT_CONFIG
        assert (config.indentation, config.line_ending, config.quote_mark) == (2, "LF", "double")
        assert config.newline == "\n"
        assert config.quote == '"'

    def test_overrides(self):
        config = create_config(indentation=4, line_ending="CRLF", quote_mark="single")
        assert config.newline == "\r\n"
        assert config.quote == "'"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"indentation": -1},
            {"indentation": "2"},
            {"indentation": True},
            {"line_ending": "CR"},
            {"quote_mark": "backtick"},
            {"semicolons": False},
        ],
    )
    def test_invalid(self, overrides):
        with pytest.raises(ConfigurationError) as exc_info:
            create_config(**overrides)
        assert exc_info.value.code == "CONFIGURATION_ERROR"

    def test_zero_indentation_allowed(self):
        assert create_config(indentation=0).indentation == 0


class TestFormatting:
    def test_reindent(self):
        code = "a {\n  b {\n    c\n  }\n}"
        assert format_indentation(code, create_config(indentation=4)) == "a {\n    b {\n        c\n    }\n}"

    def test_imports_hoisted_below_header(self):
        code = '/* header */\nconst a = 1;\nimport { z } from "zod";\nimport { R } from "express";'
        assert format_imports(code) == (
            '/* header */\nimport { R } from "express";\nimport { z } from "zod";\n\nconst a = 1;'
        )

    def test_no_imports_unchanged(self):
        assert format_imports("const a = 1;") == "const a = 1;"

    def test_crlf(self):
        out = format_code("a\n  b\n", create_config(line_ending="CRLF"))
        assert out == "a\r\n  b\r\n"


class TestConfigMessages:
    def test_unknown_option_named(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration option: semicolons"):
            create_config(semicolons=False)

    def test_indentation_message(self):
        with pytest.raises(ConfigurationError, match="non-negative"):
            create_config(indentation=-2)

    def test_config_is_frozen(self):
        with pytest.raises(pydantic.ValidationError):
            DEFAULT_CONFIG.indentation = 4

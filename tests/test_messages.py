"""Tests for message formatting and the message catalog."""

import pytest

from formcheck.validation.errors import ConfigurationError, MissingMessageError
from formcheck.validation.messages import MessageCatalog, format_message
from formcheck.validation.types import MessageKey, Outcome


class TestFormatMessage:
    def test_substitutes_named_placeholder(self):
        result = format_message("This value should be greater than or equal to {min}.", {"min": 5})
        assert result == "This value should be greater than or equal to 5."

    def test_unmatched_placeholder_left_verbatim(self):
        assert format_message("Between {min} and {max}.", {"min": 1}) == "Between 1 and {max}."

    def test_placeholder_names_are_not_patterns(self):
        assert format_message("{a.b} {axb}", {"a.b": "dot"}) == "dot {axb}"

    def test_each_key_replaces_one_placeholder(self):
        assert format_message("{x} {x}", {"x": 1}) == "1 {x}"

    def test_replacement_text_is_literal(self):
        assert format_message("{path}", {"path": r"C:\temp\1"}) == r"C:\temp\1"

    def test_integral_floats_render_as_integers(self):
        assert format_message("{min}", {"min": 5.0}) == "5"
        assert format_message("{min}", {"min": 2.5}) == "2.5"

    def test_no_params(self):
        assert format_message("Hi {name}!", {}) == "Hi {name}!"


class TestMessageCatalog:
    def test_dotted_lookup(self):
        catalog = MessageCatalog.default()
        assert catalog.template("type.email") == "This value should be a valid email."
        assert catalog.template(MessageKey.REQUIRED) == "This value is required."

    def test_every_message_key_has_a_default(self):
        catalog = MessageCatalog.default()
        for key in MessageKey:
            assert catalog.template(key)

    def test_missing_key_raises(self):
        with pytest.raises(MissingMessageError):
            MessageCatalog.default().template("type.postcode")

    def test_branch_is_not_a_message(self):
        with pytest.raises(MissingMessageError):
            MessageCatalog.default().template("type")

    def test_missing_message_is_configuration_error(self):
        catalog = MessageCatalog({"type": {}})
        with pytest.raises(ConfigurationError):
            catalog.template(MessageKey.TYPE_EMAIL)

    def test_render(self):
        outcome = Outcome(
            constraint="range",
            valid=False,
            message_key=MessageKey.RANGE,
            params={"min": 10, "max": 20},
        )
        assert MessageCatalog.default().render(outcome) == "This value should be between 10 and 20."

    def test_from_yaml_merges_over_defaults(self, tmp_path):
        path = tmp_path / "messages.yaml"
        path.write_text("type:\n  email: Bad email.\nrequired: Needed.\n")
        catalog = MessageCatalog.from_yaml(path)
        assert catalog.template("type.email") == "Bad email."
        assert catalog.template("type.url") == "This value should be a valid url."
        assert catalog.template("required") == "Needed."

    def test_from_yaml_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "messages.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            MessageCatalog.from_yaml(path)

    def test_keys(self):
        keys = MessageCatalog.default().keys()
        assert "type.email" in keys
        assert "min" in keys
        assert "type" not in keys

"""
Tests for ConfigValidator
"""

import unittest

from tacbot.utils.config_validator import ConfigValidator


class TestConfigValidator(unittest.TestCase):
    """Test cases for ConfigValidator."""

    def setUp(self):
        self.validator = ConfigValidator()

    def test_required_field_present(self):
        self.validator.add_rule("game.length_ms", required=True)
        is_valid, errors = self.validator.validate({"game.length_ms": 540000})
        self.assertTrue(is_valid)
        self.assertEqual(len(errors), 0)

    def test_required_field_missing(self):
        self.validator.add_rule("game.length_ms", required=True)
        is_valid, errors = self.validator.validate({})
        self.assertFalse(is_valid)
        self.assertGreater(len(errors), 0)

    def test_optional_field_with_default(self):
        self.validator.add_rule("hotel.increment", required=False, default=70)
        config = {}
        is_valid, _ = self.validator.validate(config)
        self.assertTrue(is_valid)
        self.assertEqual(config.get("hotel.increment"), 70)

    def test_validator_function(self):
        self.validator.add_rule("game.clients", validator=lambda x: x > 0)
        self.assertTrue(self.validator.validate({"game.clients": 8})[0])
        self.assertFalse(self.validator.validate({"game.clients": 0})[0])

    def test_raising_validator_is_an_error(self):
        self.validator.add_rule("flight.phases", validator=lambda x: x[0] is not None,
                                error_message="bad phases")
        is_valid, errors = self.validator.validate({"flight.phases": []})
        self.assertFalse(is_valid)
        self.assertEqual(errors, ["bad phases"])


if __name__ == "__main__":
    unittest.main()

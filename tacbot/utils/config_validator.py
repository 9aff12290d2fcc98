"""
Configuration Validator
-----------------------
Rule-based checks over a flat (dotted-key) view of the agent configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class ConfigRule:
    """Rule for validating a configuration value."""
    key: str
    required: bool = True
    default: Any = None
    validator: Optional[Callable[[Any], bool]] = None
    error_message: Optional[str] = None


class ConfigValidator:
    """
    Validates a flat configuration mapping.

    Usage:
        validator = ConfigValidator()
        validator.add_rule("game.length_ms", validator=lambda x: x > 0)
        is_valid, errors = validator.validate({"game.length_ms": 540000})
    """

    def __init__(self):
        self.rules: List[ConfigRule] = []
        self.logger = logging.getLogger("ConfigValidator")

    def add_rule(
        self,
        key: str,
        required: bool = True,
        default: Any = None,
        validator: Optional[Callable[[Any], bool]] = None,
        error_message: Optional[str] = None,
    ) -> None:
        """Add a validation rule."""
        self.rules.append(
            ConfigRule(
                key=key,
                required=required,
                default=default,
                validator=validator,
                error_message=error_message,
            )
        )

    def validate(self, config: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate all rules against ``config``.

        Missing optional keys with a default are filled in place.

        Returns:
            Tuple of (is_valid: bool, errors: list[str])
        """
        errors: List[str] = []

        for rule in self.rules:
            value = config.get(rule.key)

            if rule.required and value is None:
                error_msg = rule.error_message or f"Required configuration '{rule.key}' is missing"
                errors.append(error_msg)
                self.logger.error("%s", error_msg)
                continue

            if value is None and rule.default is not None:
                value = rule.default
                config[rule.key] = value
                self.logger.debug("Using default for %s: %s", rule.key, rule.default)

            if value is not None and rule.validator is not None:
                try:
                    ok = rule.validator(value)
                except Exception as e:
                    ok = False
                    self.logger.debug("Validator for %s raised: %s", rule.key, e)
                if not ok:
                    error_msg = rule.error_message or f"Invalid value for '{rule.key}': {value}"
                    errors.append(error_msg)
                    self.logger.error("%s", error_msg)

        if errors:
            self.logger.error("Configuration validation failed with %d errors", len(errors))
        return len(errors) == 0, errors

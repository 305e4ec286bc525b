"""
Input/output validation rules and the safety-check extension point.

Every configured rule runs; failures are collected rather than short-circuited.
"""

import inspect
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Union

logger = logging.getLogger(__name__)

Predicate = Callable[[str], Union[bool, Awaitable[bool]]]


@dataclass
class ValidationRule:
    name: str
    validator: Predicate
    error_message: str


InputValidationRule = ValidationRule
OutputValidationRule = ValidationRule


@dataclass
class SafetyCheckRule:
    name: str
    checker: Predicate
    severity: str = "warning"  # warning | error
    action: str = "log"  # log | block | modify
    error_message: str = ""


@dataclass
class GuardrailConfig:
    input_validation: List[ValidationRule] = field(default_factory=list)
    output_validation: List[ValidationRule] = field(default_factory=list)
    safety_checks: List[SafetyCheckRule] = field(default_factory=list)


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class SafetyIssue:
    rule: SafetyCheckRule
    result: bool = False


@dataclass
class SafetyCheckResult:
    safe: bool
    issues: List[SafetyIssue] = field(default_factory=list)


async def _evaluate(predicate: Predicate, text: str) -> bool:
    outcome: Any = predicate(text)
    if inspect.isawaitable(outcome):
        outcome = await outcome
    return bool(outcome)


class _RuleValidator:
    def __init__(self, rules: List[ValidationRule]):
        self.rules = list(rules or [])

    async def validate(self, text: str) -> ValidationResult:
        errors: List[str] = []
        for rule in self.rules:
            try:
                if not await _evaluate(rule.validator, text):
                    errors.append(rule.error_message)
            except Exception as e:
                logger.warning(f"Validation rule {rule.name} raised: {e}")
                errors.append(f"Validation error in rule {rule.name}: {e}")
        return ValidationResult(valid=not errors, errors=errors)


class InputValidator(_RuleValidator):
    """Validates user input against a list of rules."""


class OutputValidator(_RuleValidator):
    """Validates model output against a list of rules."""


class SafetyChecker:
    """Runs safety rules and reports issues; acting on them is left to the caller."""

    def __init__(self, rules: List[SafetyCheckRule]):
        self.rules = list(rules or [])

    async def check(self, content: str) -> SafetyCheckResult:
        issues: List[SafetyIssue] = []
        for rule in self.rules:
            try:
                if not await _evaluate(rule.checker, content):
                    issues.append(SafetyIssue(rule=rule, result=False))
            except Exception as e:
                logger.error(f"Safety rule {rule.name} raised: {e}")
                issues.append(SafetyIssue(rule=rule, result=False))
        return SafetyCheckResult(safe=not issues, issues=issues)


def _word_pattern(words: List[str]) -> "re.Pattern[str]":
    return re.compile(r"\b(" + "|".join(re.escape(w) for w in words) + r")\b", re.IGNORECASE)


class _InputRules:
    @staticmethod
    def no_profanity(words: List[str]) -> ValidationRule:
        pattern = _word_pattern(words)
        return ValidationRule(
            name="no_profanity",
            validator=lambda text: not pattern.search(text),
            error_message="Input contains blocked words, please rephrase.",
        )

    @staticmethod
    def min_length(length: int) -> ValidationRule:
        return ValidationRule(
            name="min_length",
            validator=lambda text: len(text) >= length,
            error_message=f"Input must be at least {length} characters.",
        )

    @staticmethod
    def max_length(length: int) -> ValidationRule:
        return ValidationRule(
            name="max_length",
            validator=lambda text: len(text) <= length,
            error_message=f"Input must not exceed {length} characters.",
        )


class _OutputRules:
    @staticmethod
    def no_profanity(words: List[str]) -> ValidationRule:
        pattern = _word_pattern(words)
        return ValidationRule(
            name="no_profanity",
            validator=lambda text: not pattern.search(text),
            error_message="Output contains blocked words.",
        )

    @staticmethod
    def min_length(length: int) -> ValidationRule:
        return ValidationRule(
            name="min_length",
            validator=lambda text: len(text) >= length,
            error_message=f"Output must be at least {length} characters.",
        )

    @staticmethod
    def max_length(length: int) -> ValidationRule:
        return ValidationRule(
            name="max_length",
            validator=lambda text: len(text) <= length,
            error_message=f"Output must not exceed {length} characters.",
        )

    @staticmethod
    def contains_info(patterns: List[str]) -> ValidationRule:
        compiled = [re.compile(p, re.IGNORECASE) for p in patterns]
        return ValidationRule(
            name="contains_info",
            validator=lambda text: all(p.search(text) for p in compiled),
            error_message="Output must contain all required information.",
        )


class BuiltInRules:
    """Ready-made rules, e.g. ``BuiltInRules.input.max_length(500)``."""
    input = _InputRules
    output = _OutputRules

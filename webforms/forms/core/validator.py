"""
Validator for request data.

A Validator stores the failed checks run against its RequestData. In a
typical workflow you create a Validator from some data, call some checks on
it (e.g. require), check whether it has errors, then present the messages.
"""

import logging
import os
import re
from typing import TYPE_CHECKING, Callable, Dict, List, Pattern, Union

from ..exceptions import FileReadError
from ..models.result import VALIDATION_OK, ValidationResult
from .coercion import parse_bool, parse_float, parse_int

if TYPE_CHECKING:
    from .data import RequestData

logger = logging.getLogger("forms.validator")

_EMAIL_PATTERN = re.compile(
    r"^[\w!#$%&'*+/=?^_`{|}~-]+(?:\.[\w!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[\w](?:[\w-]*[\w])?\.)+[a-zA-Z0-9](?:[\w-]*[\w])?\Z",
    re.ASCII,
)

Comparison = Callable[[float, float], bool]


def _format_number(value: float) -> str:
    # 18.0 -> "18", 2.5 -> "2.5"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _file_ext(filename: str) -> str:
    """Suffix of the base name from its last ".", dot included. ".htaccess" -> ".htaccess"."""
    base = os.path.basename(filename)
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def _human_list(items: List[str]) -> str:
    """Join items as "x", "x and y" or "x, y, and z"."""
    if len(items) <= 1:
        return "".join(items)
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return ", ".join(items[:-1]) + f", and {items[-1]}"


class Validator:
    """
    Runs checks against a RequestData and accumulates the failures.

    Every check returns a ValidationResult. Failed results can be customized
    fluently:

        val.require("retired").with_field("retired_status").with_message("...")
    """

    def __init__(self, data: "RequestData"):
        self.data = data
        self.results: List[ValidationResult] = []

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def add_error(self, field: str, message: str) -> ValidationResult:
        """Record an error for field. message should be a user-readable sentence."""
        result = ValidationResult(ok=False, field=field, message=message)
        self.results.append(result)
        logger.debug("Validation failed", extra={"field": field, "validation_message": message})
        return result

    def has_errors(self) -> bool:
        """True iff any check run on this Validator failed."""
        return len(self.results) > 0

    def messages(self) -> List[str]:
        """Messages of all failed checks, in order."""
        return [result.message for result in self.results]

    def fields(self) -> List[str]:
        """Fields of all failed checks, in order."""
        return [result.field for result in self.results]

    def error_map(self) -> Dict[str, List[str]]:
        """Messages grouped by field name."""
        errors: Dict[str, List[str]] = {}
        for result in self.results:
            errors.setdefault(result.field, []).append(result.message)
        return errors

    # ------------------------------------------------------------------
    # Presence
    # ------------------------------------------------------------------

    def require(self, field: str) -> ValidationResult:
        """Fail if field is absent, empty, or only whitespace."""
        if self.data.get(field).strip() == "":
            return self._add_required_error(field)
        return VALIDATION_OK

    def require_file(self, field: str) -> ValidationResult:
        """Fail if no file was provided for field, or if it is empty or unreadable."""
        if not self.data.file_exists(field):
            return self._add_required_error(field)
        try:
            content = self.data.get_file_bytes(field)
        except FileReadError:
            return self.add_error(field, "Could not read file.")
        if not content:
            return self.add_error(field, f"{field} is required and cannot be an empty file.")
        return VALIDATION_OK

    def _add_required_error(self, field: str) -> ValidationResult:
        return self.add_error(field, f"{field} is required.")

    # ------------------------------------------------------------------
    # Length
    # ------------------------------------------------------------------

    def min_length(self, field: str, length: int) -> ValidationResult:
        """Fail if field has fewer than length characters, not counting surrounding whitespace."""
        if len(self.data.get(field).strip()) < length:
            return self.add_error(field, f"{field} must be at least {length} characters long.")
        return VALIDATION_OK

    def max_length(self, field: str, length: int) -> ValidationResult:
        """Fail if field has more than length characters, not counting surrounding whitespace."""
        if len(self.data.get(field).strip()) > length:
            return self.add_error(field, f"{field} cannot be more than {length} characters long.")
        return VALIDATION_OK

    def length_range(self, field: str, min_length: int, max_length: int) -> ValidationResult:
        """Fail if the length of field is outside [min_length, max_length]."""
        value = self.data.get(field)
        if len(value) < min_length or len(value) > max_length:
            return self.add_error(
                field,
                f"{field} must be between {min_length} and {max_length} characters long.",
            )
        return VALIDATION_OK

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def equal(self, field1: str, field2: str) -> ValidationResult:
        """Fail if field1 and field2 differ. The error is attached to field2."""
        if self.data.get(field1) != self.data.get(field2):
            # "match" reads better than "be equal"; unrelated to regex matching
            return self.add_error(field2, f"{field1} and {field2} must match.")
        return VALIDATION_OK

    def match(self, field: str, pattern: Union[str, Pattern[str]]) -> ValidationResult:
        """Fail if field contains no match for the regular expression pattern."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        if not regex.search(self.data.get(field)):
            return self.add_error(field, f"{field} must be correctly formatted.")
        return VALIDATION_OK

    def match_email(self, field: str) -> ValidationResult:
        """Fail if field is not formatted like an email address."""
        return self.match(field, _EMAIL_PATTERN)

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def type_int(self, field: str) -> ValidationResult:
        """Fail if field cannot be converted to an int."""
        try:
            parse_int(self.data.get(field))
        except ValueError:
            return self._add_type_error(field, "integer")
        return VALIDATION_OK

    def type_float(self, field: str) -> ValidationResult:
        """Fail if field cannot be converted to a float."""
        try:
            parse_float(self.data.get(field))
        except ValueError:
            return self._add_type_error(field, "number")
        return VALIDATION_OK

    def type_bool(self, field: str) -> ValidationResult:
        """Fail if field cannot be converted to a bool."""
        try:
            parse_bool(self.data.get(field))
        except ValueError:
            return self._add_type_error(field, "true or false")
        return VALIDATION_OK

    def _add_type_error(self, field: str, noun: str) -> ValidationResult:
        article = "an" if noun[0] in "aeiou" else "a"
        return self.add_error(field, f"{field} must be {article} {noun}.")

    # ------------------------------------------------------------------
    # Numeric comparisons
    # ------------------------------------------------------------------

    def greater(self, field: str, value: float) -> ValidationResult:
        """Fail if field is not a number greater than value."""
        return self._compare(field, value, lambda given, target: given > target, "greater than")

    def greater_or_equal(self, field: str, value: float) -> ValidationResult:
        """Fail if field is not a number greater than or equal to value."""
        return self._compare(
            field, value, lambda given, target: given >= target, "greater than or equal to"
        )

    def less(self, field: str, value: float) -> ValidationResult:
        """Fail if field is not a number less than value."""
        return self._compare(field, value, lambda given, target: given < target, "less than")

    def less_or_equal(self, field: str, value: float) -> ValidationResult:
        """Fail if field is not a number less than or equal to value."""
        return self._compare(
            field, value, lambda given, target: given <= target, "less than or equal to"
        )

    def _compare(
        self, field: str, value: float, condition: Comparison, relation: str
    ) -> ValidationResult:
        try:
            given = parse_float(self.data.get(field))
        except ValueError:
            return self._add_type_error(field, "number")
        if not condition(given, value):
            return self.add_error(field, f"{field} must be {relation} {_format_number(value)}.")
        return VALIDATION_OK

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def accept_file_exts(self, field: str, *exts: str) -> ValidationResult:
        """
        Fail if the extension of the file for field is not one of exts.

        exts are given without the leading "." and compared case-sensitively.
        No error is recorded when no file was provided for field.
        """
        upload = self.data.get_file(field)
        if upload is None:
            return VALIDATION_OK
        got_ext = _file_ext(upload.filename or "")
        if got_ext and got_ext[1:] in exts:
            return VALIDATION_OK
        return self.add_error(
            field,
            f"The file extension {got_ext or '(none)'} is not allowed. "
            f"Allowed extensions include: {_human_list(list(exts))}.",
        )

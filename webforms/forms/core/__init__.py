"""
Core logic package.

Provides request parsing, the unified request data map and validation.
"""

from .data import RequestData
from .json_flatten import flatten_json_object, parse_json_body
from .parser import parse, parse_urlencoded
from .validator import Validator

__all__ = [
    "RequestData",
    "flatten_json_object",
    "parse_json_body",
    "parse",
    "parse_urlencoded",
    "Validator",
]

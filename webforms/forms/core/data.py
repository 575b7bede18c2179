"""
Request data container.

RequestData holds data obtained from the request body and url query
parameters. Because it is built from multiple sources, a key may have more
than one value. get/set/add/delete operate on the first element for a key;
the values and files attributes can be read directly for the rest.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar
from urllib.parse import urlencode

from pydantic import TypeAdapter, ValidationError
from starlette.datastructures import UploadFile

from ..exceptions import CoercionError, DecodeError, FileReadError
from .coercion import parse_bool, parse_float, parse_int
from .json_flatten import loads_json
from .validator import Validator

logger = logging.getLogger("forms.data")

T = TypeVar("T")


class RequestData:
    """
    Unified multi-value field map of a single request.

    Attributes:
        values: field name -> ordered list of string values. Holds every field
            of a json body or urlencoded form, the non-file fields of a
            multipart form, and the url query parameters.
        files: field name -> uploaded file. Multipart forms only, one file per
            key.
    """

    def __init__(self) -> None:
        self.values: Dict[str, List[str]] = {}
        self.files: Dict[str, UploadFile] = {}
        # Original body of a json request, kept for bind_json.
        self._json_body: Optional[bytes] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "RequestData":
        """Create a RequestData with one value per key of mapping."""
        data = cls()
        for key, value in mapping.items():
            data.add(key, value)
        return data

    def __repr__(self) -> str:
        return f"RequestData(values={self.values!r}, files={sorted(self.files)!r})"

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, key: str, value: str) -> None:
        """Append value to key. Existing values are kept."""
        self.values.setdefault(key, []).append(value)

    def set(self, key: str, value: str) -> None:
        """Set key to value, replacing any existing values."""
        self.values[key] = [value]

    def delete(self, key: str) -> None:
        """Delete the values associated with key (if any)."""
        self.values.pop(key, None)

    def add_file(self, key: str, file: UploadFile) -> None:
        """Associate an uploaded file with key, replacing any previous one."""
        self.files[key] = file

    def delete_file(self, key: str) -> None:
        """Delete the file associated with key (if any)."""
        self.files.pop(key, None)

    def set_json_body(self, body: bytes) -> None:
        self._json_body = body

    def close(self) -> None:
        """Release the spooled file handles of all uploaded files."""
        for upload in self.files.values():
            upload.file.close()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, key: str) -> str:
        """
        Return the first value associated with key, or "" if there is none.
        """
        values = self.values.get(key)
        if not values:
            return ""
        return values[0]

    def get_bytes(self, key: str) -> bytes:
        """Return the first value associated with key encoded as UTF-8."""
        return self.get(key).encode("utf-8")

    def key_exists(self, key: str) -> bool:
        """
        Return True iff key was provided, even if its value is empty.
        """
        return key in self.values

    def file_exists(self, key: str) -> bool:
        """
        Return True iff a file was provided for key, even if it is empty.
        """
        return key in self.files

    def get_file(self, key: str) -> Optional[UploadFile]:
        """Return the uploaded file associated with key, or None."""
        return self.files.get(key)

    def get_file_bytes(self, key: str) -> Optional[bytes]:
        """
        Return the content of the file associated with key.

        Returns None (not an error) if there is no file for key. Use
        file_exists to tell whether the file was provided at all.

        Raises:
            FileReadError: the file content could not be read
        """
        upload = self.files.get(key)
        if upload is None:
            return None
        try:
            upload.file.seek(0)
            return upload.file.read()
        except (OSError, ValueError) as e:
            logger.warning(
                f"Failed to read uploaded file for {key}",
                extra={"key": key, "filename": upload.filename, "error": str(e)},
            )
            raise FileReadError(key, e) from e

    def encode(self) -> str:
        """
        Encode the values into "URL encoded" form ("bar=baz&foo=quux") sorted
        by key. Files are ignored.
        """
        return urlencode(
            [(key, value) for key in sorted(self.values) for value in self.values[key]]
        )

    # ------------------------------------------------------------------
    # Typed getters
    # ------------------------------------------------------------------

    def _first_present(self, key: str) -> Optional[str]:
        value = self.get(key)
        return value if value != "" else None

    def get_int(self, key: str) -> int:
        """
        Return the first value for key converted to an int (0 if absent).

        Raises:
            CoercionError: the value is present but not an integer
        """
        value = self._first_present(key)
        if value is None:
            return 0
        try:
            return parse_int(value)
        except ValueError as e:
            raise CoercionError(key, value, "int") from e

    def get_float(self, key: str) -> float:
        """
        Return the first value for key converted to a float (0.0 if absent).

        Raises:
            CoercionError: the value is present but not a number
        """
        value = self._first_present(key)
        if value is None:
            return 0.0
        try:
            return parse_float(value)
        except ValueError as e:
            raise CoercionError(key, value, "float") from e

    def get_bool(self, key: str) -> bool:
        """
        Return the first value for key converted to a bool (False if absent).

        Raises:
            CoercionError: the value is present but not a boolean literal
        """
        value = self._first_present(key)
        if value is None:
            return False
        try:
            return parse_bool(value)
        except ValueError as e:
            raise CoercionError(key, value, "bool") from e

    def get_strings_split(self, key: str, delim: str) -> Optional[List[str]]:
        """
        Return the first value for key split on delim.

        Returns None when key is absent, so a missing field can be told apart
        from a present but empty one.
        """
        if not self.values.get(key):
            return None
        value = self.values[key][0]
        if delim == "":
            return list(value)
        return value.split(delim)

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def _load_json_field(self, key: str) -> Any:
        try:
            return loads_json(self.get(key))
        except ValueError as e:
            raise DecodeError(f"Malformed JSON in field {key}: {e}") from e

    def get_dict_from_json(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Decode the first value for key as a JSON object.

        Returns None when key is absent.

        Raises:
            DecodeError: the value is not valid JSON or not an object
        """
        if not self.values.get(key):
            return None
        result = self._load_json_field(key)
        if not isinstance(result, dict):
            raise DecodeError(f"Field {key} does not hold a JSON object")
        return result

    def get_list_from_json(self, key: str) -> Optional[List[Any]]:
        """
        Decode the first value for key as a JSON array.

        Returns None when key is absent.

        Raises:
            DecodeError: the value is not valid JSON or not an array
        """
        if not self.values.get(key):
            return None
        result = self._load_json_field(key)
        if not isinstance(result, list):
            raise DecodeError(f"Field {key} does not hold a JSON array")
        return result

    def get_json_as(self, key: str, target: Type[T]) -> Optional[T]:
        """
        Decode the first value for key as JSON into target.

        target is anything pydantic's TypeAdapter accepts: a BaseModel,
        a dataclass, or a typing construct such as Dict[str, float].
        Returns None when key is absent.

        Raises:
            DecodeError: the value is not valid JSON or does not fit target
        """
        if not self.values.get(key):
            return None
        try:
            return TypeAdapter(target).validate_json(self.get(key))
        except ValidationError as e:
            raise DecodeError(f"Field {key} does not match {target!r}: {e}") from e

    def bind_json(self, target: Type[T]) -> Optional[T]:
        """
        Validate the original json request body into target.

        Returns None when the request had no json body.

        Raises:
            DecodeError: the body does not fit target
        """
        if not self._json_body:
            return None
        try:
            return TypeAdapter(target).validate_json(self._json_body)
        except ValidationError as e:
            raise DecodeError(f"JSON body does not match {target!r}: {e}") from e

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validator(self) -> Validator:
        """Return a Validator bound to this data."""
        return Validator(self)

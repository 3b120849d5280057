"""
Field references into records.

A reference is a path expression such as ".Payload.After", ".Payload.After.embedding",
'.Payload.After["nested"]["field"]' or ".Metadata.cohere.model". It is parsed once
(at configuration time) by ReferenceResolver and then resolved against each record.

Supported roots:
- .Position
- .Operation
- .Metadata (optionally one key below it)
- .Key (optionally a nested field path)
- .Payload.Before / .Payload.After (optionally a nested field path)
"""

import json
import re
from collections.abc import Mapping
from typing import Any, Optional

from cohere_processor.models.enums import Operation
from cohere_processor.records.exceptions import FieldResolutionError, ReferenceParseError
from cohere_processor.records.models import Data, Record

_TOKEN = re.compile(r'\.(?P<name>[A-Za-z_][A-Za-z0-9_]*)|\[(?P<quoted>"(?:[^"\\]|\\.)*")\]')

_POSITION = "Position"
_OPERATION = "Operation"
_METADATA = "Metadata"
_KEY = "Key"
_PAYLOAD = "Payload"
_PAYLOAD_VIEWS = {"Before": "before", "After": "after"}


def _tokenize(path: str) -> list[str]:
    if not path.startswith("."):
        raise ReferenceParseError(
            f"invalid reference {path!r}: must start with '.'", details={"path": path}
        )

    tokens: list[str] = []
    pos = 0
    while pos < len(path):
        match = _TOKEN.match(path, pos)
        if match is None:
            raise ReferenceParseError(
                f"invalid reference {path!r}: unexpected character at position {pos}",
                details={"path": path, "position": pos},
            )
        if match.group("name") is not None:
            tokens.append(match.group("name"))
        else:
            tokens.append(json.loads(match.group("quoted")))
        pos = match.end()
    return tokens


class ReferenceResolver:
    """
    Parsed field reference, resolvable against any record.

    Raises ReferenceParseError on construction if the path is malformed or
    does not start at a known record root.
    """

    def __init__(self, path: str):
        self.path = path
        tokens = _tokenize(path)
        root = tokens[0]

        if root in (_POSITION, _OPERATION):
            if len(tokens) > 1:
                raise ReferenceParseError(
                    f"invalid reference {path!r}: {root} has no fields", details={"path": path}
                )
            self._root = root
            self._view: Optional[str] = None
            self._fields: tuple[str, ...] = ()
        elif root == _METADATA:
            if len(tokens) > 2:
                raise ReferenceParseError(
                    f"invalid reference {path!r}: metadata is not nested", details={"path": path}
                )
            self._root = root
            self._view = None
            self._fields = tuple(tokens[1:])
        elif root == _KEY:
            self._root = root
            self._view = None
            self._fields = tuple(tokens[1:])
        elif root == _PAYLOAD:
            if len(tokens) < 2 or tokens[1] not in _PAYLOAD_VIEWS:
                raise ReferenceParseError(
                    f"invalid reference {path!r}: expected .Payload.Before or .Payload.After",
                    details={"path": path},
                )
            self._root = root
            self._view = _PAYLOAD_VIEWS[tokens[1]]
            self._fields = tuple(tokens[2:])
        else:
            raise ReferenceParseError(
                f"invalid reference {path!r}: unknown field {root!r}", details={"path": path}
            )

    def resolve(self, record: Record) -> "Reference":
        """Bind the reference to a record."""
        return Reference(record, self._root, self._view, self._fields, self.path)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.path!r})"


class Reference:
    """A reference bound to one record; reads and writes the addressed field."""

    def __init__(
        self,
        record: Record,
        root: str,
        view: Optional[str],
        fields: tuple[str, ...],
        path: str,
    ):
        self._record = record
        self._root = root
        self._view = view
        self._fields = fields
        self.path = path

    def get(self) -> Any:
        """Current value of the field (None when a nested field is missing)."""
        record = self._record
        if self._root == _POSITION:
            return record.position
        if self._root == _OPERATION:
            return record.operation
        if self._root == _METADATA:
            if self._fields:
                return record.metadata.get(self._fields[0])
            return record.metadata

        data = self._get_data()
        if not self._fields:
            return data
        if data is None:
            return None
        if isinstance(data, bytes):
            raise FieldResolutionError(
                f"cannot get field {self.path!r} from raw data", details={"path": self.path}
            )

        node: Any = data
        for name in self._fields:
            if not isinstance(node, Mapping):
                return None
            node = node.get(name)
        return node

    def set(self, value: Any) -> None:
        """
        Assign a value to the field.

        Raises:
            FieldResolutionError: If the value cannot be stored at this location
        """
        if self._root == _POSITION:
            self._record.position = self._to_bytes(value)
        elif self._root == _OPERATION:
            self._set_operation(value)
        elif self._root == _METADATA:
            self._set_metadata(value)
        elif not self._fields:
            self._set_data(self._to_data(value))
        else:
            self._set_nested(value)

    def _get_data(self) -> Data:
        if self._root == _KEY:
            return self._record.key
        return getattr(self._record.payload, self._view)

    def _set_data(self, data: Data) -> None:
        if self._root == _KEY:
            self._record.key = data
        else:
            setattr(self._record.payload, self._view, data)

    def _set_nested(self, value: Any) -> None:
        data = self._get_data()
        if data is None:
            data = {}
        if isinstance(data, bytes):
            raise FieldResolutionError(
                f"cannot set field {self.path!r} on raw data", details={"path": self.path}
            )

        node = data
        for name in self._fields[:-1]:
            child = node.get(name)
            if child is None:
                child = {}
                node[name] = child
            elif not isinstance(child, dict):
                raise FieldResolutionError(
                    f"cannot set field {self.path!r}: {name!r} is not a map",
                    details={"path": self.path, "field": name},
                )
            node = child

        node[self._fields[-1]] = value
        self._set_data(data)

    def _set_metadata(self, value: Any) -> None:
        if self._fields:
            if not isinstance(value, str):
                raise FieldResolutionError(
                    f"cannot set {type(value).__name__} to {self.path!r}: expected str",
                    details={"path": self.path},
                )
            self._record.metadata[self._fields[0]] = value
            return

        if not isinstance(value, Mapping) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in value.items()
        ):
            raise FieldResolutionError(
                f"cannot set {type(value).__name__} to {self.path!r}: expected dict[str, str]",
                details={"path": self.path},
            )
        self._record.metadata = dict(value)

    def _set_operation(self, value: Any) -> None:
        try:
            self._record.operation = Operation(value)
        except ValueError as e:
            raise FieldResolutionError(
                f"cannot set {value!r} to {self.path!r}: invalid operation",
                details={"path": self.path},
            ) from e

    def _to_bytes(self, value: Any) -> bytes:
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        if isinstance(value, str):
            return value.encode("utf-8")
        raise FieldResolutionError(
            f"cannot set {type(value).__name__} to {self.path!r}: expected bytes or str",
            details={"path": self.path},
        )

    def _to_data(self, value: Any) -> Data:
        if value is None:
            return None
        if isinstance(value, Mapping):
            return dict(value)
        if isinstance(value, (bytes, bytearray, str)):
            return self._to_bytes(value)
        raise FieldResolutionError(
            f"cannot set {type(value).__name__} to {self.path!r}: expected raw or structured data",
            details={"path": self.path},
        )

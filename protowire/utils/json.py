# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""
Helpers for the JSON side of the codec: the JSON value union, compact (de)serialization to UTF-8 bytes, and the
string forms protobuf JSON uses for bytes and non-finite floats.

>>> bytes_to_json(b'\xfb\xff')
'+/8='
>>> json_to_bytes('-_8')
b'\xfb\xff'
>>> float_to_json(float('-inf'))
'-Infinity'
>>> json_to_float('NaN')
nan
"""

import base64
import binascii
import json
import math
import re
from typing import Any, TypeAlias

# These are all the values that can be observed when parsing a JSON with the builtin json module
# See: https://docs.python.org/3/library/json.html#encoders-and-decoders
JsonValue: TypeAlias = dict[str, Any] | list[Any] | str | int | float | bool | None

_NON_FINITE_TO_JSON = {
    'nan': 'NaN',
    'inf': 'Infinity',
    '-inf': '-Infinity',
}
_NON_FINITE_FROM_JSON = {
    'NaN': math.nan,
    'Infinity': math.inf,
    '-Infinity': -math.inf,
}

# numbers written as JSON strings follow the JSON number grammar, without whitespace or underscores
INTEGER_RE = re.compile(r'-?[0-9]+')
NUMBER_RE = re.compile(r'-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?')


def json_loadb(raw: bytes) -> JsonValue:
    """Compact loading as UTF-8 encoded bytes/string to a Python object."""
    # XXX: from Python3.6 onwards, json.loads can take bytes
    #      See: https://docs.python.org/3/library/json.html#json.loads
    try:
        return json.loads(raw)
    except UnicodeDecodeError as exc:
        # We cannot do `doc=raw` because it expects a str and there
        # is no way to decode it.
        raise json.JSONDecodeError(msg=str(exc), doc=raw.hex(), pos=exc.start) from exc


def json_dumpb(obj: object) -> bytes:
    """Compact formating obj as JSON to UTF-8 encoded bytes."""
    return json_dumps(obj).encode('utf-8')


def json_dumps(obj: object) -> str:
    """Compact formating obj as JSON to UTF-8 encoded string."""
    return json.dumps(obj, separators=(',', ':'), ensure_ascii=False)


def bytes_to_json(data: bytes) -> str:
    """Standard base64 with padding."""
    return base64.b64encode(data).decode('ascii')


def json_to_bytes(text: str) -> bytes:
    """ Parse base64 in either the standard or the URL-safe alphabet, padding is optional.
    """
    normalized = text.strip().replace('-', '+').replace('_', '/')
    normalized += '=' * (-len(normalized) % 4)
    try:
        return base64.b64decode(normalized, validate=True)
    except binascii.Error as e:
        raise ValueError(f'invalid base64: {e}') from e


def float_to_json(value: float) -> float | str:
    if math.isfinite(value):
        return value
    return _NON_FINITE_TO_JSON[repr(value)]


def json_to_float(json_value: JsonValue) -> float:
    match json_value:
        case bool():
            raise TypeError('expected a number, got a boolean')
        case int() | float():
            return float(json_value)
        case str() if json_value in _NON_FINITE_FROM_JSON:
            return _NON_FINITE_FROM_JSON[json_value]
        case str():
            if NUMBER_RE.fullmatch(json_value) is None:
                raise ValueError(f'invalid number: {json_value!r}')
            value = float(json_value)
            if not math.isfinite(value):
                raise ValueError(f'invalid number: {json_value!r}')
            return value
        case _:
            raise TypeError(f'expected a number, got {type(json_value).__name__}')

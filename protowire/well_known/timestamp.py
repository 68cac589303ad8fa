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
`google.protobuf.Timestamp`, a point in time as seconds and nanoseconds since the Unix epoch, represented natively as
a timezone-aware `datetime` in UTC.

`datetime` has microsecond resolution, so the sub-microsecond part of `nanos` is dropped (rounded toward zero) when
converting to a native value. This conversion is lossy.

>>> timestamp_to_datetime(1, 999_999_999)
datetime.datetime(1970, 1, 1, 0, 0, 1, 999999, tzinfo=datetime.timezone.utc)
>>> datetime_to_timestamp(datetime(2024, 1, 2, 3, 4, 5, 600000, tzinfo=timezone.utc))
(1704164645, 600000000)
>>> adapter = TimestampAdapter()
>>> adapter.to_json(datetime(2024, 1, 2, 3, 4, 5, 600000, tzinfo=timezone.utc))
'2024-01-02T03:04:05.600Z'
>>> adapter.from_json('2024-01-02T00:04:05.123456789-03:00')
datetime.datetime(2024, 1, 2, 3, 4, 5, 123456, tzinfo=datetime.timezone.utc)
"""

import re
from datetime import datetime, timedelta, timezone

from typing_extensions import override

from protowire.schema.descriptors import FieldDescriptor, MessageDescriptor
from protowire.schema.field_kind import FieldKind
from protowire.utils.json import INTEGER_RE, JsonValue
from protowire.well_known.adapter import Message, WellKnownAdapter

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# 0001-01-01T00:00:00Z and 9999-12-31T23:59:59Z, the range of RFC 3339
MIN_SECONDS = -62_135_596_800
MAX_SECONDS = 253_402_300_799
MAX_NANOS = 999_999_999

_RFC3339_RE = re.compile(
    r'^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})[Tt]'
    r'(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.(?P<fraction>\d{1,9}))?'
    r'(?P<offset>[Zz]|[+-]\d{2}:\d{2})$'
)

TIMESTAMP_DESCRIPTOR = MessageDescriptor(
    name='google.protobuf.Timestamp',
    fields=(
        FieldDescriptor(name='seconds', number=1, kind=FieldKind.INT64),
        FieldDescriptor(name='nanos', number=2, kind=FieldKind.INT32),
    ),
)


def check_timestamp(seconds: int, nanos: int) -> None:
    if not MIN_SECONDS <= seconds <= MAX_SECONDS:
        raise ValueError(f'timestamp seconds out of range: {seconds}')
    if not 0 <= nanos <= MAX_NANOS:
        raise ValueError(f'timestamp nanos out of range: {nanos}')


def timestamp_to_datetime(seconds: int, nanos: int) -> datetime:
    check_timestamp(seconds, nanos)
    return EPOCH + timedelta(seconds=seconds, microseconds=nanos // 1000)


def datetime_to_timestamp(value: datetime) -> tuple[int, int]:
    """ Returns `(seconds, nanos)`, naive datetimes are taken as UTC.
    """
    delta = _as_utc(value) - EPOCH
    return delta.days * 86400 + delta.seconds, delta.microseconds * 1000


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f'timestamp out of range: {value}') from e


def parse_rfc3339(text: str) -> datetime:
    """ Parse an RFC 3339 timestamp with any offset and 0 to 9 fractional digits.
    """
    match = _RFC3339_RE.match(text)
    if match is None:
        raise ValueError(f'invalid RFC 3339 timestamp: {text!r}')
    fraction = match['fraction'] or ''
    offset = match['offset']
    if offset in ('Z', 'z'):
        tzinfo = timezone.utc
    else:
        sign = -1 if offset[0] == '-' else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        tzinfo = timezone(sign * timedelta(hours=hours, minutes=minutes))
    value = datetime(
        int(match['year']),
        int(match['month']),
        int(match['day']),
        int(match['hour']),
        int(match['minute']),
        int(match['second']),
        int(fraction.ljust(9, '0')[:6]),
        tzinfo=tzinfo,
    )
    return _as_utc(value)


def format_rfc3339(value: datetime) -> str:
    """ Format in UTC with a `Z` suffix and 0, 3 or 6 fractional digits.
    """
    utc = _as_utc(value)
    text = (
        f'{utc.year:04d}-{utc.month:02d}-{utc.day:02d}T'
        f'{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}'
    )
    if utc.microsecond == 0:
        return f'{text}Z'
    if utc.microsecond % 1000 == 0:
        return f'{text}.{utc.microsecond // 1000:03d}Z'
    return f'{text}.{utc.microsecond:06d}Z'


class TimestampAdapter(WellKnownAdapter[datetime]):
    full_name = TIMESTAMP_DESCRIPTOR.name
    descriptor = TIMESTAMP_DESCRIPTOR

    @override
    def default(self) -> datetime:
        return EPOCH

    @override
    def check_value(self, value: datetime) -> None:
        if not isinstance(value, datetime):
            raise TypeError(f'{self.full_name} expects a datetime, got {type(value).__name__}')

    @override
    def normalize(self, value: datetime) -> datetime:
        self.check_value(value)
        return _as_utc(value)

    @override
    def wrap(self, value: datetime) -> Message:
        seconds, nanos = datetime_to_timestamp(value)
        return {'seconds': seconds, 'nanos': nanos}

    @override
    def unwrap(self, message: Message) -> datetime:
        return timestamp_to_datetime(int(message['seconds']), int(message['nanos']))

    @override
    def to_json(self, value: datetime) -> JsonValue:
        return format_rfc3339(value)

    @override
    def from_json(self, json_value: JsonValue) -> datetime:
        match json_value:
            case datetime():
                return _as_utc(json_value)
            case str():
                return parse_rfc3339(json_value)
            case dict():
                return timestamp_to_datetime(
                    _json_int(json_value.get('seconds', 0), 'seconds'),
                    _json_int(json_value.get('nanos', 0), 'nanos'),
                )
            case _:
                raise TypeError(f'{self.full_name} expects an RFC 3339 string, got {type(json_value).__name__}')


def _json_int(value: JsonValue, name: str) -> int:
    match value:
        case bool():
            raise TypeError(f'{name} expects an integer, got a boolean')
        case int():
            return value
        case str() if INTEGER_RE.fullmatch(value):
            return int(value, 10)
        case str():
            raise ValueError(f'{name} expects an integer, got {value!r}')
        case _:
            raise TypeError(f'{name} expects an integer, got {type(value).__name__}')

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
`google.protobuf.Duration`, a signed span of time as seconds and nanoseconds, represented natively as a `timedelta`.

Like timestamps, the sub-microsecond part is dropped (rounded toward zero) when converting to a native value. In JSON
a duration is a decimal number of seconds with an `s` suffix.

>>> adapter = DurationAdapter()
>>> adapter.to_json(timedelta(seconds=1, milliseconds=500))
'1.500s'
>>> adapter.to_json(timedelta(microseconds=-1))
'-0.000001s'
>>> adapter.from_json('-1.0000015s')
datetime.timedelta(days=-1, seconds=86398, microseconds=999999)
>>> adapter.wrap(timedelta(seconds=-1, microseconds=-500))
{'seconds': -1, 'nanos': -500000}
"""

import re
from datetime import timedelta

from typing_extensions import override

from protowire.schema.descriptors import FieldDescriptor, MessageDescriptor
from protowire.schema.field_kind import FieldKind
from protowire.utils.json import JsonValue
from protowire.well_known.adapter import Message, WellKnownAdapter
from protowire.well_known.timestamp import _json_int

# about 10000 years
MAX_SECONDS = 315_576_000_000
MAX_NANOS = 999_999_999

_DURATION_RE = re.compile(r'^(?P<sign>-)?(?P<seconds>\d+)(?:\.(?P<fraction>\d{1,9}))?s$')

DURATION_DESCRIPTOR = MessageDescriptor(
    name='google.protobuf.Duration',
    fields=(
        FieldDescriptor(name='seconds', number=1, kind=FieldKind.INT64),
        FieldDescriptor(name='nanos', number=2, kind=FieldKind.INT32),
    ),
)


def check_duration(seconds: int, nanos: int) -> None:
    if not -MAX_SECONDS <= seconds <= MAX_SECONDS:
        raise ValueError(f'duration seconds out of range: {seconds}')
    if not -MAX_NANOS <= nanos <= MAX_NANOS:
        raise ValueError(f'duration nanos out of range: {nanos}')
    if (seconds < 0 < nanos) or (nanos < 0 < seconds):
        raise ValueError(f'duration seconds and nanos have different signs: {seconds}, {nanos}')


def duration_to_timedelta(seconds: int, nanos: int) -> timedelta:
    check_duration(seconds, nanos)
    # int() truncates toward zero, unlike floor division
    return timedelta(seconds=seconds, microseconds=int(nanos / 1000))


def timedelta_to_duration(value: timedelta) -> tuple[int, int]:
    """ Returns `(seconds, nanos)` with both values sharing the same sign.
    """
    total_micros = value // timedelta(microseconds=1)
    sign = -1 if total_micros < 0 else 1
    seconds, micros = divmod(abs(total_micros), 1_000_000)
    seconds, nanos = sign * seconds, sign * micros * 1000
    check_duration(seconds, nanos)
    return seconds, nanos


class DurationAdapter(WellKnownAdapter[timedelta]):
    full_name = DURATION_DESCRIPTOR.name
    descriptor = DURATION_DESCRIPTOR

    @override
    def default(self) -> timedelta:
        return timedelta(0)

    @override
    def check_value(self, value: timedelta) -> None:
        if not isinstance(value, timedelta):
            raise TypeError(f'{self.full_name} expects a timedelta, got {type(value).__name__}')
        if abs(value) > timedelta(seconds=MAX_SECONDS, microseconds=MAX_NANOS // 1000):
            raise ValueError(f'duration out of range: {value}')

    @override
    def wrap(self, value: timedelta) -> Message:
        seconds, nanos = timedelta_to_duration(value)
        return {'seconds': seconds, 'nanos': nanos}

    @override
    def unwrap(self, message: Message) -> timedelta:
        return duration_to_timedelta(int(message['seconds']), int(message['nanos']))

    @override
    def to_json(self, value: timedelta) -> JsonValue:
        seconds, nanos = timedelta_to_duration(value)
        sign = '-' if seconds < 0 or nanos < 0 else ''
        seconds, micros = abs(seconds), abs(nanos) // 1000
        if micros == 0:
            return f'{sign}{seconds}s'
        if micros % 1000 == 0:
            return f'{sign}{seconds}.{micros // 1000:03d}s'
        return f'{sign}{seconds}.{micros:06d}s'

    @override
    def from_json(self, json_value: JsonValue) -> timedelta:
        match json_value:
            case timedelta():
                self.check_value(json_value)
                return json_value
            case str():
                match = _DURATION_RE.match(json_value)
                if match is None:
                    raise ValueError(f'invalid duration: {json_value!r}')
                sign = -1 if match['sign'] else 1
                seconds = int(match['seconds'])
                nanos = int((match['fraction'] or '').ljust(9, '0'))
                return duration_to_timedelta(sign * seconds, sign * nanos)
            case dict():
                return duration_to_timedelta(
                    _json_int(json_value.get('seconds', 0), 'seconds'),
                    _json_int(json_value.get('nanos', 0), 'nanos'),
                )
            case _:
                raise TypeError(f'{self.full_name} expects a string like "1.5s", got {type(json_value).__name__}')

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

from datetime import datetime, timedelta, timezone

import pytest

from protowire.well_known.timestamp import (
    EPOCH,
    MAX_SECONDS,
    MIN_SECONDS,
    TimestampAdapter,
    datetime_to_timestamp,
    format_rfc3339,
    parse_rfc3339,
    timestamp_to_datetime,
)


def test_sub_microsecond_nanos_are_rounded_toward_zero():
    assert timestamp_to_datetime(0, 1_999) == EPOCH + timedelta(microseconds=1)
    assert timestamp_to_datetime(0, 999) == EPOCH
    # nanos count forward from seconds, also before the epoch
    assert timestamp_to_datetime(-1, 999_999_999) == EPOCH - timedelta(microseconds=1)


def test_negative_timestamps():
    value = datetime(1969, 12, 31, 23, 59, 59, 250000, tzinfo=timezone.utc)
    assert datetime_to_timestamp(value) == (-1, 250_000_000)
    assert timestamp_to_datetime(-1, 250_000_000) == value


def test_range():
    assert timestamp_to_datetime(MIN_SECONDS, 0) == datetime(1, 1, 1, tzinfo=timezone.utc)
    assert timestamp_to_datetime(MAX_SECONDS, 999_999_999).year == 9999
    with pytest.raises(ValueError):
        timestamp_to_datetime(MAX_SECONDS + 1, 0)
    with pytest.raises(ValueError):
        timestamp_to_datetime(0, -1)
    with pytest.raises(ValueError):
        timestamp_to_datetime(0, 1_000_000_000)


def test_naive_datetimes_are_utc():
    assert datetime_to_timestamp(datetime(1970, 1, 2)) == (86400, 0)


@pytest.mark.parametrize('value, text', [
    (datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc), '2024-01-02T03:04:05Z'),
    (datetime(2024, 1, 2, 3, 4, 5, 120000, tzinfo=timezone.utc), '2024-01-02T03:04:05.120Z'),
    (datetime(2024, 1, 2, 3, 4, 5, 123456, tzinfo=timezone.utc), '2024-01-02T03:04:05.123456Z'),
    (datetime(2024, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2))), '2024-01-02T03:04:05Z'),
])
def test_format_rfc3339(value, text):
    assert format_rfc3339(value) == text


@pytest.mark.parametrize('text, value', [
    ('1970-01-01T00:00:00Z', EPOCH),
    ('1970-01-01T00:00:00.000000001Z', EPOCH),
    ('1970-01-01t01:30:00.5+01:30', EPOCH + timedelta(milliseconds=500)),
    ('2000-02-29T12:00:00.123456789z', datetime(2000, 2, 29, 12, 0, 0, 123456, tzinfo=timezone.utc)),
])
def test_parse_rfc3339(text, value):
    assert parse_rfc3339(text) == value


@pytest.mark.parametrize('text', ['2024-01-02', '2024-01-02T03:04:05', '2024-13-02T03:04:05Z', 'yesterday'])
def test_parse_invalid(text):
    with pytest.raises(ValueError):
        parse_rfc3339(text)


def test_adapter():
    adapter = TimestampAdapter()
    value = datetime(2024, 1, 2, 3, 4, 5, 600000, tzinfo=timezone.utc)
    assert adapter.wrap(value) == {'seconds': 1704164645, 'nanos': 600_000_000}
    assert adapter.unwrap({'seconds': 1704164645, 'nanos': 600_000_999}) == value
    assert adapter.from_json({'seconds': '1704164645', 'nanos': 600_000_000}) == value
    with pytest.raises(ValueError):
        adapter.from_json({'seconds': '1_704_164_645'})
    assert adapter.normalize(datetime(2024, 1, 2, 3, 4, 5, 600000)) == value
    with pytest.raises(TypeError):
        adapter.check_value('2024-01-02T03:04:05Z')

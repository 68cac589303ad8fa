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

# a 64-bit value needs at most ceil(64 / 7) = 10 groups of 7 bits
MAX_VARINT_BYTES = 10

# maximum nesting of length-delimited messages accepted when decoding, same default as the reference implementations
DEFAULT_RECURSION_LIMIT = 100

MASK_32 = (1 << 32) - 1
MASK_64 = (1 << 64) - 1

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = MASK_32
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = MASK_64

# largest integer magnitude that an IEEE-754 double represents exactly, a.k.a. Number.MAX_SAFE_INTEGER
MAX_SAFE_INTEGER = 2**53 - 1

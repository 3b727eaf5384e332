# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES.
# SPDX-FileCopyrightText: All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Pure decoding helpers for raw MED datasets.

MED stores every name as a table of signed 8-bit character codes and every
numeric table as a flat buffer. These functions turn such buffers into
strings and fixed-width numpy records.
"""

import re
from collections.abc import Sequence

import numpy as np

from .constants import PRINTABLE_ASCII
from .errors import DecodeError, LayoutError, ParseError

_TRAILING_DIGITS = re.compile(r"(\d+)$")


def decode_ascii(data: Sequence[int], strict: bool = False) -> str:
    """Convert a sequence of signed 8-bit character codes to a string.

    Decoding stops at the first NUL code and trailing blanks are stripped,
    since MED pads fixed-width names with spaces.

    Args:
        data: Character codes (e.g. an int8 numpy row)
        strict: Reject codes outside printable ASCII instead of passing them through

    Returns:
        Decoded string

    Raises:
        DecodeError: If strict is set and a code is not printable ASCII
    """
    codes = np.asarray(data, dtype=np.int64).ravel()
    nul = np.flatnonzero(codes == 0)
    if nul.size:
        codes = codes[: nul[0]]

    low, high = PRINTABLE_ASCII
    if strict:
        bad = codes[(codes < low) | (codes > high)]
        if bad.size:
            raise DecodeError(
                f"Character code {int(bad[0])} is outside printable ASCII range"
            )

    # int8 storage wraps codes above 127 to negative values
    chars = [chr(int(c) & 0xFF) for c in codes]
    return "".join(chars).rstrip()


def decode_ascii_table(raw, width: int, strict: bool = False) -> list[str]:
    """Decode a table of fixed-width names.

    Args:
        raw: Either a 2-D array with one name per row or a flat array of codes
        width: Number of codes per name in the flat layout
        strict: Passed on to decode_ascii

    Returns:
        List of decoded names in stored order
    """
    table = np.asarray(raw)
    if table.ndim == 0:
        return [decode_ascii(table.reshape(1), strict=strict)]
    if table.ndim == 1:
        table = decode_flat_array(table, width)
    return [decode_ascii(row, strict=strict) for row in table]


def decode_node_id(name: str) -> int:
    """Return the id number embedded in an entity name.

    Code Aster names entities after their number, i.e. N123 => 123.

    Raises:
        ParseError: If the name does not end in a run of digits
    """
    match = _TRAILING_DIGITS.search(name.strip())
    if match is None:
        raise ParseError(f"No numeric id found in entity name {name!r}")
    return int(match.group(1))


def decode_flat_array(raw, stride: int, interlaced: bool = True) -> np.ndarray:
    """Split a flat numeric buffer into fixed-length records.

    Args:
        raw: Flat buffer
        stride: Number of values per record
        interlaced: If True, each run of ``stride`` consecutive values is one
            record. If False, the buffer is component-major (MED "no
            interlace" mode): all first components, then all second
            components, and so on.

    Returns:
        Array of shape (len(raw) // stride, stride)

    Raises:
        LayoutError: If the buffer length is not a multiple of stride
    """
    if stride < 1:
        raise LayoutError(f"Record stride must be positive, got {stride}")

    values = np.asarray(raw).ravel()
    if values.size % stride != 0:
        raise LayoutError(
            f"Buffer of {values.size} values is not a multiple of stride {stride}"
        )

    count = values.size // stride
    if interlaced:
        return values.reshape(count, stride)
    return values.reshape(stride, count).T

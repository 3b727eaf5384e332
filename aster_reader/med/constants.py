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
This module contains constants for the MED container format.
"""

from dataclasses import dataclass
from enum import Enum


class EntityKind(str, Enum):
    """Kinds of mesh entities that carry families."""

    NODE = "node"
    ELEMENT = "element"


@dataclass(frozen=True)
class NameWidths:
    """Fixed widths of the character tables stored in MED files."""

    ENTITY_NAME: int = 16  # MED_SNAME_SIZE, node and element names
    COMPONENT_NAME: int = 16  # MED_SNAME_SIZE
    GROUP_NAME: int = 80  # MED_LNAME_SIZE


# Number of nodes per element for the MED geometric types.
ELEMENT_NODE_COUNTS: dict[str, int] = {
    "PO1": 1,  # point
    "SE2": 2,  # linear segment
    "SE3": 3,
    "SE4": 4,
    "TR3": 3,  # triangles
    "TR6": 6,
    "TR7": 7,
    "QU4": 4,  # quadrangles
    "QU8": 8,
    "QU9": 9,
    "TE4": 4,  # tetrahedra
    "T10": 10,
    "PY5": 5,  # pyramids
    "P13": 13,
    "PE6": 6,  # pentahedra
    "P15": 15,
    "P18": 18,
    "HE8": 8,  # hexahedra
    "H20": 20,
    "H27": 27,
}

# Printable ASCII range accepted by strict decoding.
PRINTABLE_ASCII = (32, 126)

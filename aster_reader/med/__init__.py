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

"""Readers for Code Aster MED mesh and RMED result containers."""

from .container import ContainerAccessor, H5ContainerAccessor
from .decoders import decode_ascii, decode_ascii_table, decode_flat_array, decode_node_id
from .errors import (
    AmbiguousMeshError,
    AsterReaderError,
    DecodeError,
    FieldNotFoundError,
    LayoutError,
    MeshNotFoundError,
    ParseError,
    SetTableMissingError,
    StepNotFoundError,
)
from .mesh_extractor import extract_mesh, get_mesh_names, select_mesh
from .reader_config import ReaderConfig
from .result_extractor import (
    get_field_names,
    get_field_steps,
    read_nodal_field,
    read_result_nodes,
)
from .schemas import ComputationStep, Element, MeshSnapshot, NamedSet, NodalField, Node
from .set_resolver import get_element_sets, get_node_sets, group_members_by_name

__all__ = [
    "AmbiguousMeshError",
    "AsterReaderError",
    "ComputationStep",
    "ContainerAccessor",
    "DecodeError",
    "Element",
    "FieldNotFoundError",
    "H5ContainerAccessor",
    "LayoutError",
    "MeshNotFoundError",
    "MeshSnapshot",
    "NamedSet",
    "NodalField",
    "Node",
    "ParseError",
    "ReaderConfig",
    "SetTableMissingError",
    "StepNotFoundError",
    "decode_ascii",
    "decode_ascii_table",
    "decode_flat_array",
    "decode_node_id",
    "extract_mesh",
    "get_element_sets",
    "get_field_names",
    "get_field_steps",
    "get_mesh_names",
    "get_node_sets",
    "group_members_by_name",
    "read_nodal_field",
    "read_result_nodes",
    "select_mesh",
]

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

"""Read Code Aster .med meshes and .rmed results."""

from .api import (
    MedFile,
    RmedFile,
    list_fields,
    list_meshes,
    read_mesh,
    read_nodal_field,
    read_result_nodes,
)
from .med import (
    AmbiguousMeshError,
    AsterReaderError,
    DecodeError,
    FieldNotFoundError,
    LayoutError,
    MeshNotFoundError,
    MeshSnapshot,
    NamedSet,
    NodalField,
    Node,
    ParseError,
    ReaderConfig,
    SetTableMissingError,
    StepNotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "AmbiguousMeshError",
    "AsterReaderError",
    "DecodeError",
    "FieldNotFoundError",
    "LayoutError",
    "MedFile",
    "MeshNotFoundError",
    "MeshSnapshot",
    "NamedSet",
    "NodalField",
    "Node",
    "ParseError",
    "ReaderConfig",
    "RmedFile",
    "SetTableMissingError",
    "StepNotFoundError",
    "list_fields",
    "list_meshes",
    "read_mesh",
    "read_nodal_field",
    "read_result_nodes",
]

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

"""Utility functions for writing small MED and RMED files in tests."""

from typing import Optional

import h5py
import numpy as np

MESH_STEP = "-0000000000000000001-0000000000000000001"
RESULT_STEP_1 = "0000000000000000000100000000000000000001"
RESULT_STEP_2 = "0000000000000000000200000000000000000001"
NO_PROFILE = "MED_NO_PROFILE_INTERNAL"

# 2D mesh used by most tests:
#
#   4 --- 5 --- 6
#   |  1  |  2  |
#   1 --- 2 --- 3
#
MOCK_COORDS = np.array(
    [[0.0, 0.0], [1.0, 0.0], [2.0, 0.0], [0.0, 1.0], [1.0, 1.0], [2.0, 1.0]]
)
MOCK_NODE_FAMILIES = [1, 1, 1, 0, 0, 2]
MOCK_ELEMENTS = {
    "QU4": {"nodes": [[1, 2, 5, 4], [2, 3, 6, 5]], "ids": [1, 2], "families": [-1, -2]},
    "SE2": {"nodes": [[1, 2], [2, 3]], "ids": [3, 4], "families": [-3, -3]},
}
MOCK_NODE_GROUPS = {
    "FAM_1_BOTTOM": ["OUTER", "BOUNDARY_2"],
    "FAM_2_CORNER": ["CORNER"],
}
MOCK_ELEMENT_GROUPS = {
    "FAM_-1_LEFT": ["LEFT", "SOLID"],
    "FAM_-2_RIGHT": ["RIGHT", "SOLID"],
    "FAM_-3_EDGE": ["BOTTOM_EDGE"],
    "FAM_-4_UNUSED": ["UNUSED"],
}


def encode_names(names: list[str], width: int, pad: str = "\0") -> np.ndarray:
    """Encode names as an (n, width) int8 character table."""
    rows = [list(name.ljust(width, pad).encode("ascii")) for name in names]
    return np.array(rows, dtype=np.int8).reshape(len(names), width)


def write_mesh(
    f: h5py.File,
    mesh_name: str,
    coords: np.ndarray,
    elements: Optional[dict] = None,
    node_ids: Optional[list[int]] = None,
    node_families: Optional[list[int]] = None,
    node_names: Optional[list[str]] = None,
    write_dimension: bool = True,
    step: str = MESH_STEP,
) -> None:
    """Write a mesh under ENS_MAA using MED's component-major layout.

    ``elements`` maps a type tag to a dict with ``nodes`` (1-based indices)
    and optional ``ids`` and ``families``.
    """
    coords = np.asarray(coords, dtype=np.float64)
    mesh = f.require_group(f"ENS_MAA/{mesh_name}")
    if write_dimension:
        mesh.attrs["ESP"] = np.int32(coords.shape[1])

    noe = mesh.create_group(f"{step}/NOE")
    noe.create_dataset("COO", data=coords.T.ravel())
    if node_ids is not None:
        noe.create_dataset("NUM", data=np.asarray(node_ids, dtype=np.int32))
    if node_families is not None:
        noe.create_dataset("FAM", data=np.asarray(node_families, dtype=np.int32))
    if node_names is not None:
        noe.create_dataset("NOM", data=encode_names(node_names, 16, pad=" "))

    for element_type, table in (elements or {}).items():
        group = mesh.create_group(f"{step}/MAI/{element_type}")
        nodes = np.asarray(table["nodes"], dtype=np.int32)
        group.create_dataset("NOD", data=nodes.T.ravel())
        if table.get("ids") is not None:
            group.create_dataset("NUM", data=np.asarray(table["ids"], dtype=np.int32))
        if table.get("families") is not None:
            group.create_dataset(
                "FAM", data=np.asarray(table["families"], dtype=np.int32)
            )


def write_families(
    f: h5py.File,
    mesh_name: str,
    node_groups: Optional[dict[str, list[str]]] = None,
    element_groups: Optional[dict[str, list[str]]] = None,
) -> None:
    """Write FAS/<mesh> family tables; keys are family group names."""
    fas = f.require_group(f"FAS/{mesh_name}")
    fas.create_group("FAMILLE_ZERO")
    for kind, groups in (("NOEUD", node_groups), ("ELEME", element_groups)):
        if groups is None:
            continue
        kind_group = fas.create_group(kind)
        for family, names in groups.items():
            family_group = kind_group.create_group(family)
            if names:
                family_group.create_dataset("GRO/NOM", data=encode_names(names, 80))


def write_field(
    f: h5py.File,
    field_name: str,
    step: str,
    values: np.ndarray,
    num_components: Optional[int] = None,
    component_names: Optional[list[str]] = None,
    profile: Optional[str] = NO_PROFILE,
) -> None:
    """Write nodal values (one row per node) under CHA/<field>/<step>."""
    values = np.asarray(values, dtype=np.float64)
    if values.ndim == 1:
        values = values[:, None]
    field = f.require_group(f"CHA/{field_name}")
    field.attrs["NCO"] = np.int32(
        values.shape[1] if num_components is None else num_components
    )
    if component_names is not None:
        field.attrs["NOM"] = np.bytes_(
            "".join(name.ljust(16) for name in component_names)
        )
    noe = field.create_group(f"{step}/NOE")
    target = noe if profile is None else noe.create_group(profile)
    target.create_dataset("CO", data=values.T.ravel())


def create_mock_med(path, mesh_names: tuple[str, ...] = ("MAIL",)) -> None:
    """Create a .med file holding the mock mesh under each of mesh_names."""
    with h5py.File(path, "w") as f:
        for mesh_name in mesh_names:
            write_mesh(
                f,
                mesh_name,
                MOCK_COORDS,
                elements=MOCK_ELEMENTS,
                node_ids=list(range(1, 7)),
                node_families=MOCK_NODE_FAMILIES,
            )
            write_families(f, mesh_name, MOCK_NODE_GROUPS, MOCK_ELEMENT_GROUPS)


def create_mock_rmed(path) -> None:
    """Create a .rmed file with nodes N10..N15 and fields TEMP and DEPL.

    TEMP is stored at two steps, DEPL (components DX, DY) at one.
    """
    with h5py.File(path, "w") as f:
        write_mesh(
            f,
            "MAIL",
            MOCK_COORDS,
            elements=MOCK_ELEMENTS,
            node_ids=list(range(1, 7)),
            node_names=[f"N{i}" for i in range(10, 16)],
        )
        write_field(f, "TEMP", RESULT_STEP_1, np.arange(6) * 10.0)
        write_field(f, "TEMP", RESULT_STEP_2, np.arange(6) * 100.0)
        depl = np.column_stack([np.arange(6) * 0.1, np.arange(6) * -0.1])
        write_field(f, "DEPL", RESULT_STEP_1, depl, component_names=["DX", "DY"])

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
Mesh extraction from MED containers.

A MED mesh lives under ``ENS_MAA/<mesh>/<step>``. The ``NOE`` group holds
the node table and ``MAI/<type>`` holds one connectivity table per element
type. Numeric tables are stored component-major ("no interlace").
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .constants import ELEMENT_NODE_COUNTS, NameWidths
from .container import ContainerAccessor
from .decoders import decode_ascii_table, decode_flat_array
from .errors import AmbiguousMeshError, LayoutError, MeshNotFoundError
from .paths import MedAttributes, MedPaths, MeshPaths, join
from .schemas import Element, MeshSnapshot, Node

logger = logging.getLogger(__name__)


@dataclass
class NodeTable:
    """Decoded node table of one mesh step."""

    ids: np.ndarray
    coordinates: np.ndarray
    families: np.ndarray
    names: Optional[list[str]] = None
    implicit_ids: bool = False

    @property
    def dimension(self) -> int:
        return self.coordinates.shape[1]


@dataclass
class ElementTable:
    """Decoded table of one element-type group."""

    element_type: str
    ids: np.ndarray
    families: np.ndarray
    connectivity: Optional[np.ndarray] = None
    implicit_ids: bool = False


def get_mesh_names(container: ContainerAccessor) -> list[str]:
    """Return the sorted names of all meshes in the container."""
    root = MeshPaths.mesh("")
    if not container.exists(root):
        return []
    return sorted(container.list_children(root))


def select_mesh(container: ContainerAccessor, mesh_name: Optional[str] = None) -> str:
    """Resolve the mesh to read.

    Args:
        container: Open container
        mesh_name: Exact mesh name, or None if the container holds a single mesh

    Returns:
        Name of the selected mesh

    Raises:
        TypeError: If mesh_name is neither None nor a string
        MeshNotFoundError: If the named mesh does not exist or there is no mesh
        AmbiguousMeshError: If no name is given and several meshes exist
    """
    if mesh_name is not None and not isinstance(mesh_name, str):
        raise TypeError(f"mesh_name must be a string, got {type(mesh_name).__name__}")

    mesh_names = get_mesh_names(container)
    all_meshes = ", ".join(mesh_names)

    if mesh_name is None:
        if not mesh_names:
            raise MeshNotFoundError(f"No meshes found in {container.path}")
        if len(mesh_names) > 1:
            raise AmbiguousMeshError(
                f"Several meshes found in {container.path}, pick one: {all_meshes}"
            )
        return mesh_names[0]

    if mesh_name not in mesh_names:
        raise MeshNotFoundError(
            f"Mesh {mesh_name} not found in {container.path}. "
            f"Available meshes: {all_meshes}"
        )
    return mesh_name


def get_mesh_step(container: ContainerAccessor, mesh_name: str) -> str:
    """Return the step group holding the mesh geometry.

    Meshes normally have exactly one step. If there are several, the first
    in sorted order (the initial configuration) is used.
    """
    steps = sorted(container.list_children(MeshPaths.mesh(mesh_name)))
    if not steps:
        raise LayoutError(f"Mesh {mesh_name} has no step group")
    if len(steps) > 1:
        logger.warning(
            f"Mesh {mesh_name} has {len(steps)} steps, using the first one: {steps[0]}"
        )
    return steps[0]


def _read_optional(container: ContainerAccessor, path: str) -> Optional[np.ndarray]:
    if container.exists(path):
        return container.read_array(path).ravel()
    return None


def _read_names(
    container: ContainerAccessor, path: str, strict: bool = False
) -> Optional[list[str]]:
    if not container.exists(path):
        return None
    return decode_ascii_table(
        container.read_array(path), NameWidths.ENTITY_NAME, strict=strict
    )


def _entity_count(counts: dict[str, Optional[int]], table_path: str) -> int:
    """Return the entity count implied by the per-entity arrays present.

    All present arrays must agree.
    """
    present = {name: n for name, n in counts.items() if n is not None}
    if not present:
        raise LayoutError(f"Cannot determine entity count of {table_path}")
    if len(set(present.values())) > 1:
        raise LayoutError(f"Inconsistent entity counts in {table_path}: {present}")
    return next(iter(present.values()))


def _ids_or_implicit(
    numbers: Optional[np.ndarray], count: int
) -> tuple[np.ndarray, bool]:
    if numbers is None:
        return np.arange(1, count + 1, dtype=np.int64), True
    return numbers.astype(np.int64), False


def read_node_table(
    container: ContainerAccessor, mesh_name: str, strict: bool = False
) -> NodeTable:
    """Read and decode the node table of a mesh.

    Node ids come from ``NUM``; without it nodes are numbered 1..N in storage
    order. The spatial dimension comes from the mesh's ``ESP`` attribute when
    present and is otherwise inferred from the coordinate count.

    Raises:
        LayoutError: If the node table is missing or its arrays disagree
    """
    step = get_mesh_step(container, mesh_name)
    noe = MeshPaths.nodes(mesh_name, step)
    coo_path = join(noe, MedPaths.COORDINATES.value)
    if not container.exists(coo_path):
        raise LayoutError(f"Mesh {mesh_name} has no node coordinates at {coo_path}")

    coo = container.read_array(coo_path).ravel().astype(np.float64)
    numbers = _read_optional(container, join(noe, MedPaths.NUMBERS.value))
    families = _read_optional(container, join(noe, MedPaths.FAMILY_NUMBERS.value))
    names = _read_names(container, join(noe, MedPaths.NAMES.value), strict)

    dimension = container.read_attribute(
        MeshPaths.mesh(mesh_name), MedAttributes.SPACE_DIMENSION.value
    )
    count_from_coo = None
    if dimension is not None:
        dimension = int(dimension)
        if dimension < 1 or coo.size % dimension != 0:
            raise LayoutError(
                f"{coo.size} coordinates do not match dimension {dimension} "
                f"of mesh {mesh_name}"
            )
        count_from_coo = coo.size // dimension

    count = _entity_count(
        {
            MedPaths.NUMBERS.value: None if numbers is None else numbers.size,
            MedPaths.FAMILY_NUMBERS.value: None if families is None else families.size,
            MedPaths.NAMES.value: None if names is None else len(names),
            MedPaths.COORDINATES.value: count_from_coo,
        },
        noe,
    )
    if count == 0:
        raise LayoutError(f"Mesh {mesh_name} has no nodes")
    if dimension is None:
        if coo.size % count != 0:
            raise LayoutError(
                f"{coo.size} coordinates cannot be split over {count} nodes"
            )
        dimension = coo.size // count

    coordinates = decode_flat_array(coo, dimension, interlaced=False)
    ids, implicit = _ids_or_implicit(numbers, count)
    if implicit:
        logger.warning(
            f"Mesh {mesh_name} stores no node numbering, numbering nodes 1..{count}"
        )
    if len(np.unique(ids)) != ids.size:
        raise LayoutError(f"Mesh {mesh_name} has duplicate node ids")
    if families is None:
        families = np.zeros(count, dtype=np.int64)

    logger.debug(f"Read {count} nodes of dimension {dimension} from {noe}")
    return NodeTable(
        ids=ids,
        coordinates=coordinates,
        families=families.astype(np.int64),
        names=names,
        implicit_ids=implicit,
    )


def read_element_table(
    container: ContainerAccessor,
    mesh_name: str,
    element_type: str,
    node_ids: Optional[np.ndarray] = None,
) -> ElementTable:
    """Read and decode one element-type group of a mesh.

    ``NOD`` holds 1-based node indices in storage order. When ``node_ids``
    is given they are mapped to node ids; otherwise connectivity is not
    decoded.

    Element ids come from ``NUM``; without it the elements of this type
    group are numbered 1..n.
    """
    step = get_mesh_step(container, mesh_name)
    table_path = join(MeshPaths.elements(mesh_name, step), element_type)
    nod = _read_optional(container, join(table_path, MedPaths.CONNECTIVITY.value))
    numbers = _read_optional(container, join(table_path, MedPaths.NUMBERS.value))
    families = _read_optional(
        container, join(table_path, MedPaths.FAMILY_NUMBERS.value)
    )
    names = _read_names(container, join(table_path, MedPaths.NAMES.value))

    nodes_per_element = ELEMENT_NODE_COUNTS.get(element_type)
    count_from_nod = None
    if nod is not None and nodes_per_element is not None:
        if nod.size % nodes_per_element != 0:
            raise LayoutError(
                f"Connectivity of {element_type} in mesh {mesh_name} has {nod.size} "
                f"entries, not a multiple of {nodes_per_element}"
            )
        count_from_nod = nod.size // nodes_per_element

    count = _entity_count(
        {
            MedPaths.NUMBERS.value: None if numbers is None else numbers.size,
            MedPaths.FAMILY_NUMBERS.value: None if families is None else families.size,
            MedPaths.NAMES.value: None if names is None else len(names),
            MedPaths.CONNECTIVITY.value: count_from_nod,
        },
        table_path,
    )

    ids, implicit = _ids_or_implicit(numbers, count)
    if families is None:
        families = np.zeros(count, dtype=np.int64)

    connectivity = None
    if node_ids is not None:
        if nod is None:
            raise LayoutError(f"Element group {table_path} has no connectivity")
        if nodes_per_element is None:
            if count == 0 or nod.size % count != 0:
                raise LayoutError(
                    f"Cannot infer node count of unknown element type {element_type}"
                )
            nodes_per_element = nod.size // count
            logger.warning(
                f"Unknown element type {element_type}, assuming "
                f"{nodes_per_element} nodes per element"
            )
        indices = decode_flat_array(nod, nodes_per_element, interlaced=False)
        indices = indices.astype(np.int64)
        if indices.size and (indices.min() < 1 or indices.max() > node_ids.size):
            raise LayoutError(
                f"Connectivity of {element_type} in mesh {mesh_name} references "
                f"nodes outside 1..{node_ids.size}"
            )
        connectivity = node_ids[indices - 1]

    return ElementTable(
        element_type=element_type,
        ids=ids,
        families=families.astype(np.int64),
        connectivity=connectivity,
        implicit_ids=implicit,
    )


def get_element_types(container: ContainerAccessor, mesh_name: str) -> list[str]:
    """Return the element-type groups present in a mesh (empty if none)."""
    step = get_mesh_step(container, mesh_name)
    mai = MeshPaths.elements(mesh_name, step)
    if not container.exists(mai):
        return []
    return sorted(container.list_children(mai))


def read_nodes(container: ContainerAccessor, mesh_name: str) -> dict[int, Node]:
    """Return node id -> Node for a mesh."""
    table = read_node_table(container, mesh_name)
    return _build_nodes(table)


def _build_nodes(table: NodeTable) -> dict[int, Node]:
    return {
        int(node_id): Node(id=int(node_id), coordinates=tuple(map(float, coords)))
        for node_id, coords in zip(table.ids, table.coordinates)
    }


def read_element_tables(
    container: ContainerAccessor, mesh_name: str, node_ids: Optional[np.ndarray]
) -> dict[str, ElementTable]:
    tables = {}
    for element_type in get_element_types(container, mesh_name):
        table = read_element_table(container, mesh_name, element_type, node_ids)
        if table.implicit_ids:
            logger.warning(
                f"Element group {element_type} of mesh {mesh_name} stores no "
                f"numbering, numbering its elements 1..{table.ids.size}"
            )
        tables[element_type] = table
    return tables


def read_connectivity(
    container: ContainerAccessor, mesh_name: str
) -> dict[str, tuple[Element, ...]]:
    """Return element type -> elements for a mesh, with node-id connectivity."""
    node_table = read_node_table(container, mesh_name)
    tables = read_element_tables(container, mesh_name, node_table.ids)
    return {t: _build_elements(table) for t, table in tables.items()}


def _build_elements(table: ElementTable) -> tuple[Element, ...]:
    return tuple(
        Element(
            id=int(element_id),
            element_type=table.element_type,
            connectivity=tuple(int(n) for n in row),
        )
        for element_id, row in zip(table.ids, table.connectivity)
    )


def extract_mesh(
    container: ContainerAccessor,
    mesh_name: Optional[str] = None,
    include_sets: bool = True,
    strict: bool = False,
) -> MeshSnapshot:
    """Read a complete mesh from an open MED container.

    Args:
        container: Open container
        mesh_name: Mesh to read; may be omitted if the file holds one mesh
        include_sets: Also resolve node and element sets
        strict: Reject non-printable characters in stored names

    Returns:
        MeshSnapshot built only after every table has been read
    """
    from .set_resolver import read_family_table, resolve_sets

    mesh_name = select_mesh(container, mesh_name)
    logger.debug(f"Extracting mesh {mesh_name} from {container.path}")

    node_table = read_node_table(container, mesh_name, strict=strict)
    element_tables = read_element_tables(container, mesh_name, node_table.ids)

    node_sets = {}
    element_sets = {}
    if include_sets:
        node_sets = resolve_sets(
            read_family_table(
                container, mesh_name, MedPaths.NODE_FAMILIES, strict=strict
            ),
            [(node_table.ids, node_table.families)],
        )
        element_sets = resolve_sets(
            read_family_table(
                container, mesh_name, MedPaths.ELEMENT_FAMILIES, strict=strict
            ),
            [(table.ids, table.families) for table in element_tables.values()],
        )

    return MeshSnapshot(
        mesh_name=mesh_name,
        dimension=node_table.dimension,
        nodes=_build_nodes(node_table),
        connectivity={t: _build_elements(tb) for t, tb in element_tables.items()},
        node_sets=node_sets,
        element_sets=element_sets,
        implicit_node_ids=node_table.implicit_ids,
        implicit_element_types=tuple(
            t for t, table in element_tables.items() if table.implicit_ids
        ),
    )

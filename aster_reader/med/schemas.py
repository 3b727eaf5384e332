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

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional, Union

import numpy as np

from .errors import LayoutError


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Node:
    """A mesh node: id plus 2D or 3D coordinates."""

    id: int
    coordinates: tuple[float, ...]


@dataclass(frozen=True)
class Element:
    """A mesh element: id, MED type tag and connectivity as node ids."""

    id: int
    element_type: str
    connectivity: tuple[int, ...]


@dataclass(frozen=True)
class NamedSet:
    """A node or element set.

    One set id can have multiple names; they are kept in stored order.
    Sets without any name have an empty ``names`` tuple.
    """

    id: int
    members: tuple[int, ...] = ()
    names: tuple[str, ...] = ()


@dataclass(frozen=True)
class ComputationStep:
    """A result step, identified by its MED group name."""

    name: str
    time_step: int
    iteration: int

    @classmethod
    def from_name(cls, name: str) -> "ComputationStep":
        """Parse a MED step group name.

        MED names step groups by a 20-character time-step number followed
        by a 20-character iteration number. Names that do not follow the
        convention keep -1 for both numbers.
        """
        try:
            return cls(name=name, time_step=int(name[:20]), iteration=int(name[20:]))
        except ValueError:
            return cls(name=name, time_step=-1, iteration=-1)


FieldValue = Union[float, tuple[float, ...]]


@dataclass(frozen=True)
class NodalField:
    """A per-node result quantity at one computation step.

    ``values`` maps node id to a float for single-component fields and to a
    tuple of floats otherwise.
    """

    name: str
    step: ComputationStep
    component_names: tuple[str, ...]
    values: Mapping[int, FieldValue]

    def __post_init__(self):
        object.__setattr__(self, "values", _frozen(self.values))

    @property
    def num_components(self) -> int:
        for value in self.values.values():
            return len(value) if isinstance(value, tuple) else 1
        return len(self.component_names)

    def as_array(self, node_ids: Optional[list[int]] = None) -> np.ndarray:
        """Return values as an (N,) or (N, C) array in the given node order."""
        ids = list(self.values) if node_ids is None else node_ids
        return np.array([self.values[i] for i in ids], dtype=np.float64)


@dataclass(frozen=True)
class MeshSnapshot:
    """Container for a mesh read from a MED file.

    Element numbering:
    - When the file stores no node numbering, nodes are numbered 1..N in
      storage order and ``implicit_node_ids`` is True.
    - When an element-type group stores no element numbering, its elements
      are numbered 1..n within that group and the type tag is listed in
      ``implicit_element_types``. Ids of such groups can collide with ids of
      other groups, in which case ``connectivity`` is the only unambiguous
      view: ``elements`` and ``to_dict()`` raise LayoutError, and element-set
      members may then repeat an id.
    """

    mesh_name: str
    dimension: int
    nodes: Mapping[int, Node]
    connectivity: Mapping[str, tuple[Element, ...]]
    node_sets: Mapping[int, NamedSet] = field(default_factory=dict)
    element_sets: Mapping[int, NamedSet] = field(default_factory=dict)
    implicit_node_ids: bool = False
    implicit_element_types: tuple[str, ...] = ()

    def __post_init__(self):
        for name in ("nodes", "connectivity", "node_sets", "element_sets"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    @property
    def num_nodes(self) -> int:
        return len(self.nodes)

    @property
    def num_elements(self) -> int:
        return sum(len(group) for group in self.connectivity.values())

    @property
    def elements(self) -> dict[int, Element]:
        """Element id -> Element across all element types.

        Raises:
            LayoutError: If an element id is used by more than one type group
        """
        elements: dict[int, Element] = {}
        for element_type, group in self.connectivity.items():
            for element in group:
                other = elements.setdefault(element.id, element)
                if other is not element:
                    raise LayoutError(
                        f"Element id {element.id} of mesh {self.mesh_name} is used by "
                        f"both {other.element_type} and {element_type}; "
                        f"use connectivity to tell them apart"
                    )
        return elements

    def coordinates(self) -> np.ndarray:
        """Node coordinates as an (N, D) array in node-id order."""
        ids = sorted(self.nodes)
        coords = np.array([self.nodes[i].coordinates for i in ids], dtype=np.float64)
        return coords.reshape(len(ids), self.dimension)

    def node_groups(self) -> dict[str, list[int]]:
        """Group name -> sorted node ids."""
        from .set_resolver import group_members_by_name

        return group_members_by_name(self.node_sets)

    def element_groups(self) -> dict[str, list[int]]:
        """Group name -> sorted element ids."""
        from .set_resolver import group_members_by_name

        return group_members_by_name(self.element_sets)

    def to_dict(self) -> dict:
        """Plain-dictionary view of the mesh.

        Keys: nodes (id -> coordinates), connectivity (type -> list of
        connectivities), elements (id -> connectivity), element_types
        (id -> type), node_sets and element_sets (group name -> ids).

        Raises:
            LayoutError: If an element id is used by more than one type group
        """
        elements = self.elements
        return {
            "nodes": {i: list(n.coordinates) for i, n in self.nodes.items()},
            "connectivity": {
                t: [list(e.connectivity) for e in group]
                for t, group in self.connectivity.items()
            },
            "elements": {i: list(e.connectivity) for i, e in elements.items()},
            "element_types": {i: e.element_type for i, e in elements.items()},
            "node_sets": self.node_groups(),
            "element_sets": self.element_groups(),
        }

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
Node and element set resolution.

MED binds sets through families. ``FAS/<mesh>/NOEUD`` and
``FAS/<mesh>/ELEME`` hold one group per family, named ``FAM_<id>_<label>``,
whose ``GRO/NOM`` dataset lists the group names of that family. The ``FAM``
array of each node or element table gives the family id of every entity.

One family id can carry several group names.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Optional

import numpy as np

from .constants import NameWidths
from .container import ContainerAccessor
from .decoders import decode_ascii_table
from .errors import ParseError, SetTableMissingError
from .mesh_extractor import (
    get_element_types,
    get_mesh_step,
    read_element_table,
    read_node_table,
    select_mesh,
)
from .paths import MedPaths, MeshPaths, join
from .schemas import NamedSet

logger = logging.getLogger(__name__)


def parse_family_id(family_group: str) -> int:
    """Return the family id of a ``FAM_<id>_<label>`` group name."""
    tokens = family_group.split("_")
    try:
        return int(tokens[1])
    except (IndexError, ValueError):
        raise ParseError(
            f"Cannot parse family id from family group {family_group!r}"
        ) from None


def read_family_table(
    container: ContainerAccessor,
    mesh_name: str,
    kind: MedPaths,
    strict: bool = False,
) -> dict[int, tuple[str, ...]]:
    """Read family id -> group names for nodes or elements.

    A mesh without a family table simply has no names.

    Raises:
        SetTableMissingError: If a family declares groups but their names are missing
    """
    families_path = MeshPaths.families(mesh_name, kind)
    if not container.exists(families_path):
        logger.debug(f"No family table at {families_path}")
        return {}

    table: dict[int, tuple[str, ...]] = {}
    for family_group in container.list_children(families_path):
        family_id = parse_family_id(family_group)
        family_path = join(families_path, family_group)
        groups_path = join(family_path, MedPaths.GROUPS.value)
        names: tuple[str, ...] = ()
        if container.exists(groups_path):
            names_path = join(groups_path, MedPaths.NAMES.value)
            if not container.exists(names_path):
                raise SetTableMissingError(
                    f"Family {family_group} declares groups but {names_path} is missing"
                )
            raw = container.read_array(names_path)
            names = tuple(
                n
                for n in decode_ascii_table(raw, NameWidths.GROUP_NAME, strict=strict)
                if n
            )
        table[family_id] = table.get(family_id, ()) + names
    return table


def resolve_sets(
    family_table: Mapping[int, tuple[str, ...]],
    memberships: Iterable[tuple[np.ndarray, np.ndarray]],
) -> dict[int, NamedSet]:
    """Join a family table with membership arrays.

    Args:
        family_table: Family id -> group names
        memberships: Pairs of (entity ids, family id per entity)

    Returns:
        Family id -> NamedSet, sorted by id. Ids that only appear in the
        membership arrays get an empty name tuple; families without members
        get an empty member tuple.
    """
    members: dict[int, list[int]] = {}
    for ids, families in memberships:
        for entity_id, family_id in zip(ids, families):
            members.setdefault(int(family_id), []).append(int(entity_id))

    set_ids = sorted(set(family_table) | set(members))
    return {
        set_id: NamedSet(
            id=set_id,
            members=tuple(members.get(set_id, ())),
            names=tuple(family_table.get(set_id, ())),
        )
        for set_id in set_ids
    }


def get_node_sets(
    container: ContainerAccessor, mesh_name: Optional[str] = None
) -> dict[int, NamedSet]:
    """Return node sets from a med file.

    Notes:
        One node set id can have multiple names.
    """
    mesh_name = select_mesh(container, mesh_name)
    step = get_mesh_step(container, mesh_name)
    node_path = MeshPaths.nodes(mesh_name, step)
    if not container.exists(node_path):
        raise SetTableMissingError(f"Node table {node_path} is missing")

    node_table = read_node_table(container, mesh_name)
    family_table = read_family_table(container, mesh_name, MedPaths.NODE_FAMILIES)
    return resolve_sets(family_table, [(node_table.ids, node_table.families)])


def get_element_sets(
    container: ContainerAccessor, mesh_name: Optional[str] = None
) -> dict[int, NamedSet]:
    """Return element sets from a med file.

    Notes:
        One element set id can have multiple names.
    """
    mesh_name = select_mesh(container, mesh_name)
    step = get_mesh_step(container, mesh_name)
    element_path = MeshPaths.elements(mesh_name, step)
    if not container.exists(element_path):
        raise SetTableMissingError(f"Element table {element_path} is missing")

    memberships = []
    for element_type in get_element_types(container, mesh_name):
        table = read_element_table(container, mesh_name, element_type)
        memberships.append((table.ids, table.families))
    family_table = read_family_table(container, mesh_name, MedPaths.ELEMENT_FAMILIES)
    return resolve_sets(family_table, memberships)


def group_members_by_name(sets: Mapping[int, NamedSet]) -> dict[str, list[int]]:
    """Collapse sets to group name -> sorted unique member ids.

    A name used by several families collects the members of all of them.
    """
    groups: dict[str, set[int]] = {}
    for named_set in sets.values():
        for name in named_set.names:
            groups.setdefault(name, set()).update(named_set.members)
    return {name: sorted(members) for name, members in groups.items()}

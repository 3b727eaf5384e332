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
Nodal result extraction from RMED containers.

Result files carry their own copy of the node table under ``ENS_MAA`` and
one group per field under ``CHA/<field>/<step>``. Nodal values live in
``NOE/<profile>/CO``, stored component-major.
"""

import logging
from typing import Optional, Union

import numpy as np

from .constants import NameWidths
from .container import ContainerAccessor
from .decoders import decode_ascii_table, decode_flat_array, decode_node_id
from .errors import FieldNotFoundError, LayoutError, ParseError, StepNotFoundError
from .mesh_extractor import read_node_table, select_mesh
from .paths import FieldPaths, MedAttributes, MedPaths, join
from .schemas import ComputationStep, NodalField, Node

logger = logging.getLogger(__name__)

StepSelector = Optional[Union[int, str]]


def get_field_names(container: ContainerAccessor) -> list[str]:
    """Return the sorted names of all result fields in the container."""
    root = FieldPaths.field("")
    if not container.exists(root):
        return []
    return sorted(container.list_children(root))


def get_field_steps(
    container: ContainerAccessor, field_name: str
) -> list[ComputationStep]:
    """Return the computation steps stored for a field, oldest first."""
    if field_name not in get_field_names(container):
        raise FieldNotFoundError(
            f"Field {field_name} not found in {container.path}. "
            f"Available fields: {', '.join(get_field_names(container))}"
        )
    names = sorted(container.list_children(FieldPaths.field(field_name)))
    return [ComputationStep.from_name(name) for name in names]


def select_step(
    container: ContainerAccessor, field_name: str, step: StepSelector = None
) -> ComputationStep:
    """Resolve the computation step to read.

    Args:
        container: Open container
        field_name: Field whose steps are searched
        step: None for the most recent step, an int to match the time-step
            number, or a str to match the step group name exactly

    Raises:
        StepNotFoundError: If no step matches
    """
    steps = get_field_steps(container, field_name)
    if not steps:
        raise StepNotFoundError(f"Field {field_name} has no computation steps")
    if step is None:
        return steps[-1]

    if isinstance(step, str):
        matches = [s for s in steps if s.name == step]
    elif isinstance(step, (int, np.integer)) and not isinstance(step, bool):
        matches = [s for s in steps if s.time_step == int(step)]
    else:
        raise TypeError(f"step must be None, int or str, got {type(step).__name__}")

    if not matches:
        available = ", ".join(s.name for s in steps)
        raise StepNotFoundError(
            f"Step {step} of field {field_name} not found. Available steps: {available}"
        )
    return matches[-1]


def read_result_node_ids(
    container: ContainerAccessor, mesh_name: Optional[str] = None
) -> tuple[str, np.ndarray, np.ndarray]:
    """Return (mesh name, node ids, coordinates) of the result node table.

    Code Aster writes node names of the form ``N<id>``, so ids are taken from
    the names when they are stored, then from ``NUM``, then 1..N. Names that
    do not end in a number fall back to ``NUM`` when it is stored.

    Raises:
        ParseError: If a name has no numeric suffix and there is no ``NUM``
    """
    mesh_name = select_mesh(container, mesh_name)
    table = read_node_table(container, mesh_name)
    ids = table.ids
    if table.names is not None:
        try:
            ids = np.array(
                [decode_node_id(name) for name in table.names], dtype=np.int64
            )
        except ParseError as e:
            if table.implicit_ids:
                raise
            logger.warning(
                f"Cannot take node ids of result mesh {mesh_name} from names "
                f"({e}), using the stored numbering"
            )
    if len(np.unique(ids)) != ids.size:
        raise LayoutError(f"Result mesh {mesh_name} has duplicate node ids")
    return mesh_name, ids, table.coordinates


def read_result_nodes(
    container: ContainerAccessor, mesh_name: Optional[str] = None
) -> list[Node]:
    """Return nodes from result med file, in storage order."""
    _, ids, coordinates = read_result_node_ids(container, mesh_name)
    return [
        Node(id=int(node_id), coordinates=tuple(map(float, coords)))
        for node_id, coords in zip(ids, coordinates)
    ]


def _nodal_values_path(
    container: ContainerAccessor, field_name: str, step: ComputationStep
) -> str:
    noe = FieldPaths.nodal_values(field_name, step.name)
    if not container.exists(noe):
        raise FieldNotFoundError(
            f"Field {field_name} has no nodal values at step {step.name}"
        )

    direct = join(noe, MedPaths.VALUES.value)
    if container.exists(direct):
        return direct

    profiles = container.list_children(noe)
    if MedPaths.NO_PROFILE.value in profiles:
        profile = MedPaths.NO_PROFILE.value
    elif len(profiles) == 1:
        profile = profiles[0]
    else:
        raise LayoutError(
            f"Field {field_name} has several profiles at step {step.name}: "
            f"{', '.join(profiles)}"
        )
    return join(noe, profile, MedPaths.VALUES.value)


def _component_names(
    container: ContainerAccessor, field_name: str, num_components: int
) -> tuple[str, ...]:
    raw = container.read_attribute(
        FieldPaths.field(field_name), MedAttributes.COMPONENT_NAMES.value
    )
    if raw is None:
        return ()
    width = NameWidths.COMPONENT_NAME
    if isinstance(raw, str):
        if len(raw) % width != 0:
            return tuple(raw.split()[:num_components])
        names = [raw[i : i + width].strip() for i in range(0, len(raw), width)]
    else:
        names = decode_ascii_table(raw, width)
    return tuple(names[:num_components])


def read_nodal_field(
    container: ContainerAccessor,
    field_name: str,
    step: StepSelector = None,
    node_ids: Optional[np.ndarray] = None,
    mesh_name: Optional[str] = None,
    log_field_names: bool = False,
) -> NodalField:
    """Read nodal field from rmed file.

    Args:
        container: Open result container
        field_name: Exact field name
        step: Step selector, see select_step
        node_ids: Node ids in storage order; read from the result node table
            when omitted
        mesh_name: Result mesh whose node table is used when node_ids is omitted
        log_field_names: Log the fields available in the file

    Returns:
        NodalField mapping node id to value(s)

    Raises:
        FieldNotFoundError: If the field or its nodal values do not exist
        LayoutError: If the value count does not match the node count
    """
    if not isinstance(field_name, str):
        raise TypeError(f"field_name must be a string, got {type(field_name).__name__}")

    if log_field_names:
        logger.info(f"results: {', '.join(get_field_names(container))}")

    selected = select_step(container, field_name, step)
    if node_ids is None:
        _, node_ids, _ = read_result_node_ids(container, mesh_name)
    node_ids = np.asarray(node_ids, dtype=np.int64)
    num_nodes = node_ids.size

    values_path = _nodal_values_path(container, field_name, selected)
    raw = container.read_array(values_path).ravel().astype(np.float64)
    logger.debug(f"Read {raw.size} values from {values_path}")

    if num_nodes == 0 or raw.size % num_nodes != 0 or raw.size == 0:
        raise LayoutError(
            f"Field {field_name} stores {raw.size} values, which does not match "
            f"{num_nodes} result nodes"
        )
    num_components = raw.size // num_nodes
    declared = container.read_attribute(
        FieldPaths.field(field_name), MedAttributes.COMPONENT_COUNT.value
    )
    if declared is not None and int(declared) != num_components:
        raise LayoutError(
            f"Field {field_name} declares {declared} components but stores "
            f"{raw.size} values for {num_nodes} nodes"
        )

    records = decode_flat_array(raw, num_components, interlaced=False)
    if num_components == 1:
        values = {int(i): float(r[0]) for i, r in zip(node_ids, records)}
    else:
        values = {int(i): tuple(map(float, r)) for i, r in zip(node_ids, records)}

    return NodalField(
        name=field_name,
        step=selected,
        component_names=_component_names(container, field_name, num_components),
        values=values,
    )

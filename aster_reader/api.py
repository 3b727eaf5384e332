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
Public read operations for Code Aster files.

To read a Code Aster .med file (exported using SALOME)::

    mesh = read_mesh(fn)

If several meshes exist in a single file, the mesh name must be given::

    mesh = read_mesh(fn, mesh_name="my_mesh")

Results can be read from .rmed files, mainly to compare Code Aster results
with results produced by another FE code::

    temperature = read_nodal_field(fn, "TEMP")
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from .med import result_extractor
from .med.container import ContainerAccessor, H5ContainerAccessor
from .med.mesh_extractor import extract_mesh, get_mesh_names
from .med.reader_config import ReaderConfig
from .med.result_extractor import StepSelector, get_field_names
from .med.schemas import MeshSnapshot, NodalField, Node

logger = logging.getLogger(__name__)

AccessorFactory = Callable[[Path], ContainerAccessor]


def _validate_path(file_path) -> Path:
    if isinstance(file_path, Path):
        file_path = str(file_path)
    if not isinstance(file_path, str) or not file_path.strip():
        raise ValueError(f"file_path must be a non-empty path, got {file_path!r}")
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path


def _validate_name(value, name: str, optional: bool = True) -> None:
    if value is None and optional:
        return
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")


class MedFile:
    """Code Aster binary file (.med).

    The handle owns its container accessor. Use it as a context manager or
    call close() when done; extracted snapshots stay valid after closing.
    """

    def __init__(
        self,
        file_path,
        accessor_factory: AccessorFactory = H5ContainerAccessor,
        config: Optional[ReaderConfig] = None,
    ):
        self.path = _validate_path(file_path)
        self.config = config or ReaderConfig()
        self.container = accessor_factory(self.path)
        self.logger = logging.getLogger(self.__class__.__name__)

    def open(self):
        self.container.open()
        return self

    def close(self) -> None:
        self.container.close()

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def mesh_names(self) -> list[str]:
        return get_mesh_names(self.container)

    def read_mesh(
        self, mesh_name: Optional[str] = None, include_sets: Optional[bool] = None
    ) -> MeshSnapshot:
        if include_sets is None:
            include_sets = self.config.include_sets
        snapshot = extract_mesh(
            self.container,
            mesh_name,
            include_sets=include_sets,
            strict=self.config.strict_ascii,
        )
        self.logger.info(
            f"Read mesh {snapshot.mesh_name} from {self.path.name}: "
            f"{snapshot.num_nodes} nodes, {snapshot.num_elements} elements"
        )
        return snapshot


class RmedFile(MedFile):
    """Code Aster result file (.rmed)."""

    def field_names(self) -> list[str]:
        return get_field_names(self.container)

    def read_nodes(self, mesh_name: Optional[str] = None) -> list[Node]:
        return result_extractor.read_result_nodes(self.container, mesh_name)

    def read_nodal_field(
        self,
        field_name: str,
        step: StepSelector = None,
        mesh_name: Optional[str] = None,
    ) -> NodalField:
        field = result_extractor.read_nodal_field(
            self.container,
            field_name,
            step=step,
            mesh_name=mesh_name,
            log_field_names=self.config.log_field_names,
        )
        self.logger.info(
            f"Read field {field.name} at step {field.step.name} from "
            f"{self.path.name}: {len(field.values)} nodes"
        )
        return field


def read_mesh(
    file_path,
    mesh_name: Optional[str] = None,
    include_sets: Optional[bool] = None,
    config: Optional[ReaderConfig] = None,
) -> MeshSnapshot:
    """Parse code aster .med file.

    Args:
        file_path: File name to parse
        mesh_name: Mesh name, required if the file holds several meshes
        include_sets: Also resolve node and element sets; None follows the config
        config: Reader options

    Returns:
        MeshSnapshot with nodes, connectivity and (optionally) sets
    """
    _validate_name(mesh_name, "mesh_name")
    with MedFile(file_path, config=config) as med:
        return med.read_mesh(mesh_name, include_sets=include_sets)


def read_result_nodes(
    file_path, mesh_name: Optional[str] = None, config: Optional[ReaderConfig] = None
) -> list[Node]:
    """Return nodes from result med file."""
    _validate_name(mesh_name, "mesh_name")
    with RmedFile(file_path, config=config) as rmed:
        return rmed.read_nodes(mesh_name)


def read_nodal_field(
    file_path,
    field_name: str,
    step: StepSelector = None,
    mesh_name: Optional[str] = None,
    config: Optional[ReaderConfig] = None,
) -> NodalField:
    """Read nodal field from rmed file.

    ``step`` selects the computation step: None for the most recent one, an
    int for a time-step number or a str for a step group name.
    """
    _validate_name(field_name, "field_name", optional=False)
    _validate_name(mesh_name, "mesh_name")
    with RmedFile(file_path, config=config) as rmed:
        return rmed.read_nodal_field(field_name, step=step, mesh_name=mesh_name)


def list_meshes(file_path) -> list[str]:
    """Return the names of the meshes stored in a .med or .rmed file."""
    with MedFile(file_path) as med:
        return med.mesh_names()


def list_fields(file_path) -> list[str]:
    """Return the names of the result fields stored in a .rmed file."""
    with RmedFile(file_path) as rmed:
        return rmed.field_names()

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
This module contains the group and dataset paths of the MED container layout.
"""

from enum import Enum


class MedPaths(str, Enum):
    """Group and dataset names used inside MED files."""

    MESHES = "ENS_MAA"
    FAMILIES = "FAS"
    FIELDS = "CHA"
    NODES = "NOE"
    ELEMENTS = "MAI"
    NODE_FAMILIES = "NOEUD"
    ELEMENT_FAMILIES = "ELEME"
    GROUPS = "GRO"
    COORDINATES = "COO"
    CONNECTIVITY = "NOD"
    NUMBERS = "NUM"
    FAMILY_NUMBERS = "FAM"
    NAMES = "NOM"
    VALUES = "CO"
    NO_PROFILE = "MED_NO_PROFILE_INTERNAL"


class MedAttributes(str, Enum):
    """Attribute names used inside MED files."""

    SPACE_DIMENSION = "ESP"
    COMPONENT_COUNT = "NCO"
    COMPONENT_NAMES = "NOM"


def join(*parts: str) -> str:
    """Join path components into an absolute container path."""
    return "/" + "/".join(str(p).strip("/") for p in parts if str(p).strip("/"))


class MeshPaths:
    """Utility class for building paths inside a mesh group.

    All methods are static and return absolute container paths.
    """

    @staticmethod
    def mesh(mesh_name: str) -> str:
        return join(MedPaths.MESHES.value, mesh_name)

    @staticmethod
    def nodes(mesh_name: str, step: str) -> str:
        """Get path to the node table of a mesh step.

        Args:
            mesh_name: Name of the mesh
            step: Name of the step group under the mesh

        Returns:
            str: Path to the NOE group
        """
        return join(MedPaths.MESHES.value, mesh_name, step, MedPaths.NODES.value)

    @staticmethod
    def elements(mesh_name: str, step: str) -> str:
        return join(MedPaths.MESHES.value, mesh_name, step, MedPaths.ELEMENTS.value)

    @staticmethod
    def families(mesh_name: str, kind: MedPaths) -> str:
        """Get path to the node or element family table of a mesh.

        Args:
            mesh_name: Name of the mesh
            kind: Either MedPaths.NODE_FAMILIES or MedPaths.ELEMENT_FAMILIES

        Returns:
            str: Path to the family group
        """
        return join(MedPaths.FAMILIES.value, mesh_name, kind.value)


class FieldPaths:
    """Utility class for building paths inside the result field tree."""

    @staticmethod
    def field(field_name: str) -> str:
        return join(MedPaths.FIELDS.value, field_name)

    @staticmethod
    def nodal_values(field_name: str, step: str) -> str:
        return join(MedPaths.FIELDS.value, field_name, step, MedPaths.NODES.value)

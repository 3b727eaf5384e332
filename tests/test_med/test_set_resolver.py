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

import h5py
import numpy as np
import pytest

from aster_reader.med.container import H5ContainerAccessor
from aster_reader.med.errors import ParseError, SetTableMissingError
from aster_reader.med.paths import MedPaths
from aster_reader.med.schemas import NamedSet
from aster_reader.med.set_resolver import (
    get_element_sets,
    get_node_sets,
    group_members_by_name,
    parse_family_id,
    read_family_table,
    resolve_sets,
)

from .utils import MESH_STEP, MOCK_COORDS, write_families, write_mesh


def test_node_set_with_two_names(med_path):
    """Test that one set id bound to two names keeps both in stored order."""
    with H5ContainerAccessor(med_path) as container:
        node_sets = get_node_sets(container, "MAIL")

    assert node_sets[1] == NamedSet(id=1, members=(1, 2, 3), names=("OUTER", "BOUNDARY_2"))
    assert node_sets[2] == NamedSet(id=2, members=(6,), names=("CORNER",))


def test_unnamed_node_set(med_path):
    """Test that ids only present in the membership table are unnamed sets."""
    with H5ContainerAccessor(med_path) as container:
        node_sets = get_node_sets(container)

    assert node_sets[0].names == ()
    assert node_sets[0].members == (4, 5)
    assert list(node_sets) == [0, 1, 2]


def test_element_sets(med_path):
    """Test element sets across element types."""
    with H5ContainerAccessor(med_path) as container:
        element_sets = get_element_sets(container, "MAIL")

    assert list(element_sets) == [-4, -3, -2, -1]
    assert element_sets[-1].names == ("LEFT", "SOLID")
    assert element_sets[-1].members == (1,)
    assert element_sets[-3].members == (3, 4)
    # Families without members are still reported
    assert element_sets[-4] == NamedSet(id=-4, members=(), names=("UNUSED",))


def test_group_members_by_name(med_path):
    """Test collapsing sets to group name -> member ids."""
    with H5ContainerAccessor(med_path) as container:
        element_sets = get_element_sets(container, "MAIL")
        node_sets = get_node_sets(container, "MAIL")

    element_groups = group_members_by_name(element_sets)
    assert element_groups["SOLID"] == [1, 2]
    assert element_groups["BOTTOM_EDGE"] == [3, 4]
    assert element_groups["UNUSED"] == []

    node_groups = group_members_by_name(node_sets)
    assert node_groups["OUTER"] == node_groups["BOUNDARY_2"] == [1, 2, 3]


def test_mesh_without_family_table(tmp_path):
    """Test that a mesh without FAS yields unnamed sets only."""
    path = tmp_path / "nofas.med"
    with h5py.File(path, "w") as f:
        write_mesh(
            f,
            "MAIL",
            MOCK_COORDS,
            elements={"SE2": {"nodes": [[1, 2]], "families": [-5]}},
            node_families=[1, 1, 0, 0, 0, 0],
        )

    with H5ContainerAccessor(path) as container:
        node_sets = get_node_sets(container)
        element_sets = get_element_sets(container)

    assert node_sets[1] == NamedSet(id=1, members=(1, 2), names=())
    assert element_sets == {-5: NamedSet(id=-5, members=(1,), names=())}


def test_missing_family_numbers_means_family_zero(tmp_path):
    """Test that entities without a FAM array belong to family 0."""
    path = tmp_path / "nofam.med"
    with h5py.File(path, "w") as f:
        write_mesh(f, "MAIL", MOCK_COORDS, node_ids=[1, 2, 3, 4, 5, 6])
        write_families(f, "MAIL", node_groups={"FAM_3_TOP": ["TOP"]})

    with H5ContainerAccessor(path) as container:
        node_sets = get_node_sets(container)

    assert node_sets[0].members == (1, 2, 3, 4, 5, 6)
    assert node_sets[3] == NamedSet(id=3, members=(), names=("TOP",))


def test_missing_node_table(tmp_path):
    """Test that a mesh step without a node table raises SetTableMissingError."""
    path = tmp_path / "nonodes.med"
    with h5py.File(path, "w") as f:
        f.create_group(f"ENS_MAA/MAIL/{MESH_STEP}")

    with H5ContainerAccessor(path) as container:
        with pytest.raises(SetTableMissingError, match="Node table"):
            get_node_sets(container)
        with pytest.raises(SetTableMissingError, match="Element table"):
            get_element_sets(container)


def test_family_groups_without_names(tmp_path):
    """Test that a GRO group without NOM raises SetTableMissingError."""
    path = tmp_path / "nonames.med"
    with h5py.File(path, "w") as f:
        write_mesh(f, "MAIL", MOCK_COORDS, node_families=[1, 1, 1, 1, 1, 1])
        f.create_group("FAS/MAIL/NOEUD/FAM_1_X/GRO")

    with H5ContainerAccessor(path) as container:
        with pytest.raises(SetTableMissingError, match="declares groups"):
            get_node_sets(container)


def test_read_family_table_merges_duplicate_ids(tmp_path):
    """Test that two family groups with one id accumulate their names."""
    path = tmp_path / "dup.med"
    with h5py.File(path, "w") as f:
        write_families(
            f,
            "MAIL",
            element_groups={"FAM_-1_A": ["A"], "FAM_-1_B": ["B", "C"], "FAM_-2_E": []},
        )

    with H5ContainerAccessor(path) as container:
        table = read_family_table(container, "MAIL", MedPaths.ELEMENT_FAMILIES)

    assert table == {-1: ("A", "B", "C"), -2: ()}


@pytest.mark.parametrize(
    "group,expected", [("FAM_1_TOP", 1), ("FAM_-12_SIDE_A", -12), ("FAM_0", 0)]
)
def test_parse_family_id(group, expected):
    """Test parsing of family ids from family group names."""
    assert parse_family_id(group) == expected


@pytest.mark.parametrize("group", ["FAMILLE_ZERO", "FAM", "FAM_x_TOP"])
def test_parse_family_id_invalid(group):
    """Test that malformed family group names raise ParseError."""
    with pytest.raises(ParseError):
        parse_family_id(group)


def test_resolve_sets_preserves_member_order():
    """Test that members keep membership-table order across tables."""
    sets = resolve_sets(
        {7: ("SEVEN",)},
        [
            (np.array([5, 3]), np.array([7, 0])),
            (np.array([9, 1]), np.array([7, 7])),
        ],
    )
    assert sets[7].members == (5, 9, 1)
    assert sets[0] == NamedSet(id=0, members=(3,), names=())

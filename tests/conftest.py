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

import pytest

from .test_med.utils import create_mock_med, create_mock_rmed


@pytest.fixture
def med_path(tmp_path):
    """Path to a .med file holding a single mesh named MAIL."""
    path = tmp_path / "mesh.med"
    create_mock_med(path)
    return path


@pytest.fixture
def rmed_path(tmp_path):
    """Path to a .rmed file with fields TEMP and DEPL."""
    path = tmp_path / "result.rmed"
    create_mock_rmed(path)
    return path

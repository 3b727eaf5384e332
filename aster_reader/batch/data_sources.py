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

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from aster_reader.api import MedFile, RmedFile
from aster_reader.med.reader_config import ReaderConfig
from aster_reader.med.result_extractor import StepSelector
from aster_reader.med.schemas import MeshSnapshot, NodalField


class DataSource(ABC):
    """Abstract base class for read-only data sources."""

    @abstractmethod
    def __init__(self, cfg: ReaderConfig):
        self.config = cfg
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def get_file_list(self) -> list[str]:
        """Get list of files to read."""
        pass

    @abstractmethod
    def read_file(self, filename: str) -> Any:
        """Read a single file and return its data."""
        pass


class MedDirectorySource(DataSource):
    """Common base for sources reading every file with one suffix in a directory."""

    suffix: str = ""

    def __init__(self, cfg: ReaderConfig, input_dir: str):
        super().__init__(cfg)
        self.input_dir = Path(input_dir)

        if not self.input_dir.exists():
            self.logger.error(f"Input directory does not exist: {self.input_dir}")
            raise FileNotFoundError(f"Input directory does not exist: {self.input_dir}")

    def get_file_list(self) -> list[str]:
        """Get list of files to read.

        Returns:
            List of filenames (without extension), sorted
        """
        files = list(self.input_dir.glob(f"*{self.suffix}"))
        filenames = [f.stem for f in files if f.is_file()]

        self.logger.info(f"Found {len(filenames)} {self.suffix} files to read")
        return sorted(filenames)

    def _get_input_path(self, filename: str) -> Path:
        filepath = self.input_dir / f"{filename}{self.suffix}"
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        return filepath


class MedMeshSource(MedDirectorySource):
    """DataSource for reading Code Aster .med mesh files."""

    suffix = ".med"

    def __init__(
        self, cfg: ReaderConfig, input_dir: str, mesh_name: Optional[str] = None
    ):
        """Initialize the mesh source.

        Args:
            cfg: Reader configuration
            input_dir: Directory containing .med files
            mesh_name: Mesh to read from every file; None if each file holds one mesh
        """
        super().__init__(cfg, input_dir)
        self.mesh_name = mesh_name

    def read_file(self, filename: str) -> MeshSnapshot:
        """Read one .med file.

        Args:
            filename: Base filename (without extension)

        Returns:
            MeshSnapshot of the selected mesh
        """
        filepath = self._get_input_path(filename)
        self.logger.info(f"Reading {filepath}")
        with MedFile(filepath, config=self.config) as med:
            return med.read_mesh(self.mesh_name)


class RmedFieldSource(MedDirectorySource):
    """DataSource for reading one nodal field from Code Aster .rmed result files."""

    suffix = ".rmed"

    def __init__(
        self,
        cfg: ReaderConfig,
        input_dir: str,
        field_name: str,
        step: StepSelector = None,
        mesh_name: Optional[str] = None,
    ):
        """Initialize the result source.

        Args:
            cfg: Reader configuration
            input_dir: Directory containing .rmed files
            field_name: Nodal field to read from every file
            step: Computation step; None for the most recent one
            mesh_name: Result mesh; None if each file holds one mesh
        """
        super().__init__(cfg, input_dir)
        self.field_name = field_name
        self.step = step
        self.mesh_name = mesh_name

    def read_file(self, filename: str) -> NodalField:
        filepath = self._get_input_path(filename)
        self.logger.info(f"Reading {self.field_name} from {filepath}")
        with RmedFile(filepath, config=self.config) as rmed:
            return rmed.read_nodal_field(
                self.field_name, step=self.step, mesh_name=self.mesh_name
            )

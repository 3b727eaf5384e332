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

import h5py
import numpy as np


class ContainerAccessor(ABC):
    """Abstract read-only view of a hierarchical container file.

    Extraction code only talks to this interface, so any hierarchical file
    library can be plugged in behind it. Accessors are context managers:
    ``with Accessor(path) as container: ...`` opens the file and closes it on
    every exit path.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def open(self) -> "ContainerAccessor":
        """Open the underlying file and return self."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying file. Closing twice is a no-op."""
        pass

    @property
    @abstractmethod
    def is_open(self) -> bool:
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether a group or dataset exists at path."""
        pass

    @abstractmethod
    def list_children(self, group_path: str) -> list[str]:
        """List the names of the members of a group.

        Args:
            group_path: Absolute path of the group

        Returns:
            Member names in the order the container reports them

        Raises:
            KeyError: If no group exists at group_path
        """
        pass

    @abstractmethod
    def read_array(self, dataset_path: str) -> np.ndarray:
        """Read a whole dataset as a numpy array (0-d for scalars).

        Raises:
            KeyError: If no dataset exists at dataset_path
        """
        pass

    @abstractmethod
    def read_attribute(self, path: str, name: str, default: Any = None) -> Any:
        """Read an attribute attached to a group or dataset.

        Returns ``default`` if the object or the attribute is missing.
        """
        pass

    def __enter__(self) -> "ContainerAccessor":
        return self.open()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class H5ContainerAccessor(ContainerAccessor):
    """ContainerAccessor for HDF5 files (MED and RMED) backed by h5py."""

    def __init__(self, path: str | Path):
        super().__init__(path)
        self._file: Optional[h5py.File] = None

    def open(self) -> "H5ContainerAccessor":
        if self._file is None:
            if not self.path.exists():
                raise FileNotFoundError(f"File not found: {self.path}")
            self.logger.debug(f"Opening {self.path}")
            self._file = h5py.File(self.path, "r")
        return self

    def close(self) -> None:
        if self._file is not None:
            self.logger.debug(f"Closing {self.path}")
            self._file.close()
            self._file = None

    @property
    def is_open(self) -> bool:
        return self._file is not None

    @property
    def file(self) -> h5py.File:
        if self._file is None:
            raise RuntimeError(f"Container {self.path} is not open")
        return self._file

    def exists(self, path: str) -> bool:
        return path in self.file

    def list_children(self, group_path: str) -> list[str]:
        group = self.file.get(group_path)
        if not isinstance(group, h5py.Group):
            raise KeyError(f"No group at {group_path} in {self.path}")
        return list(group.keys())

    def read_array(self, dataset_path: str) -> np.ndarray:
        dataset = self.file.get(dataset_path)
        if not isinstance(dataset, h5py.Dataset):
            raise KeyError(f"No dataset at {dataset_path} in {self.path}")
        return np.asarray(dataset[()])

    def read_attribute(self, path: str, name: str, default: Any = None) -> Any:
        obj = self.file.get(path)
        if obj is None or name not in obj.attrs:
            return default
        value = obj.attrs[name]
        if isinstance(value, (bytes, np.bytes_)):
            return value.decode("ascii", errors="replace")
        if isinstance(value, np.generic):
            return value.item()
        return value

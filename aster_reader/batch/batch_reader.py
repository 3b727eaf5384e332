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
from typing import Any

from tqdm import tqdm

from aster_reader.med.reader_config import ReaderConfig

from .data_sources import DataSource


class BatchReader:
    """Read every file of a data source, one after the other."""

    def __init__(self, source: DataSource, config: ReaderConfig):
        self.source = source
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self.errors: dict[str, str] = {}

    def run(self) -> dict[str, Any]:
        """Read all files of the source.

        Files that fail to read are logged, recorded in ``errors`` and
        skipped.

        Returns:
            Filename -> data returned by the source
        """
        files = self.source.get_file_list()
        self.errors = {}
        results: dict[str, Any] = {}

        if not files:
            self.logger.warning("No files found to read")
            return results

        pbar = tqdm(
            total=len(files),
            desc="Reading files",
            unit="file",
            disable=not self.config.show_progress,
        )
        for filename in files:
            try:
                results[filename] = self.source.read_file(filename)
            except Exception as e:  # noqa: PERF203
                self.logger.error(f"Error reading file {filename}: {str(e)}")
                self.errors[filename] = str(e)
            pbar.update(1)
        pbar.close()

        self.logger.info(
            f"Read {len(results)} of {len(files)} files, {len(self.errors)} failed"
        )
        return results

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

import time
from typing import Any

import hydra
from hydra.utils import instantiate
from omegaconf import DictConfig, OmegaConf

from aster_reader.batch.batch_reader import BatchReader
from aster_reader.med.reader_config import ReaderConfig
from aster_reader.med.schemas import MeshSnapshot, NodalField
from aster_reader.utils import utils as reader_utils


def describe(data: Any) -> str:
    """One-line summary of a value returned by a data source."""
    if isinstance(data, MeshSnapshot):
        sets = len(data.node_sets) + len(data.element_sets)
        return (
            f"mesh {data.mesh_name}: {data.num_nodes} nodes, "
            f"{data.num_elements} elements, {sets} sets"
        )
    if isinstance(data, NodalField):
        return (
            f"field {data.name} at step {data.step.name}: {len(data.values)} nodes, "
            f"{data.num_components} components"
        )
    return type(data).__name__


@hydra.main(version_base="1.3")
def main(cfg: DictConfig) -> None:
    """Batch read execution.

    Can be run with a config dir and a config name:
    python run_reader.py --config-dir /path/to/config/dir --config-name name-of-config

    Users can also override any config parameters by passing them on the command line.
    For example:
    python run_reader.py --config-dir config --config-name read_meshes reader.source.input_dir=/data/meshes
    """

    logger = reader_utils.setup_logger()
    logger.info("Starting batch read")

    if not cfg:  # Check for None or empty config
        logger.error("No configuration provided or empty configuration")
        logger.error("Please run with --config-dir and --config-name")
        return

    logger.info(f"Config summary:\n{OmegaConf.to_yaml(cfg, sort_keys=True)}")

    reader_config = ReaderConfig(**cfg.reader.get("config", {}))

    # Create source
    source = instantiate(cfg.reader.source, reader_config)

    reader = BatchReader(source=source, config=reader_config)

    wall_clock_start = time.time()

    try:
        results = reader.run()

        wall_clock_time = time.time() - wall_clock_start
        logger.info("\nRead Summary:")
        for filename, data in results.items():
            logger.info(f"{filename}: {describe(data)}")
        for filename, message in reader.errors.items():
            logger.error(f"{filename}: {message}")
        logger.info(f"Total wall clock time: {wall_clock_time:.2f} seconds")

    except Exception as e:
        logger.error(f"Reading failed: {e}")
        raise


if __name__ == "__main__":
    main()

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

"""Error types raised while reading MED containers."""


class AsterReaderError(Exception):
    """Base class for all errors raised by aster_reader."""


class MeshNotFoundError(AsterReaderError, KeyError):
    """The requested mesh does not exist in the container."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class AmbiguousMeshError(AsterReaderError):
    """No mesh name was given and the container holds several meshes."""


class FieldNotFoundError(AsterReaderError, KeyError):
    """The requested result field does not exist in the container."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class StepNotFoundError(FieldNotFoundError):
    """The field exists but not at the requested computation step."""


class SetTableMissingError(AsterReaderError):
    """Set membership data is declared but cannot be located."""


class LayoutError(AsterReaderError, ValueError):
    """A buffer length is inconsistent with its expected record layout."""


class DecodeError(AsterReaderError, ValueError):
    """Raw bytes are not valid for the declared content type."""


class ParseError(AsterReaderError, ValueError):
    """An identifier could not be extracted from an entity name."""

# Copyright 2025 Roger Cibrian
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

"""Public API return types for yamlstack.

Example:
    ```python
    from yamlstack.merger import MultipleConfigurationMerger

    result = MultipleConfigurationMerger().fold(["base.yaml", "prod.yaml"])
    for skipped in result.skipped:
        print(f"{skipped.path}: {skipped.reason}")
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SkippedSource:
    """A document the fold could not use.

    Attributes:
        path: The path identifier as given by the caller.
        reason: The error message from the reader or parser.
    """

    path: str
    reason: str


@dataclass(frozen=True)
class MergeResult:
    """Result from folding a list of documents.

    The dataclass is frozen but ``config`` is the live accumulator dict.

    Attributes:
        config: The merged configuration tree.
        merged: Paths whose documents were merged, in order.
        empty: Paths that were read but held an empty document.
        skipped: Paths that failed to read or parse.
    """

    config: dict[Any, Any]
    merged: tuple[str, ...] = ()
    empty: tuple[str, ...] = ()
    skipped: tuple[SkippedSource, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        """True when no document was skipped."""
        return not self.skipped

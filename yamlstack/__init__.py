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

"""yamlstack - layered YAML configuration merging

Merges a base configuration document with any number of override documents
into one configuration, later documents winning on conflict.

yamlstack provides:

- Deep, type-aware merging of mappings, sequences and scalars
- Best-effort folding: missing or malformed overrides are skipped
- Readers for local files and HTTP(S) URLs
- Materialization into dataclasses or pydantic models

Quick Start:

    $ yamlstack merge config/base.yaml config/prod.yaml

From Python:

    from yamlstack import merge_configs
    config = merge_configs(["config/base.yaml", "config/prod.yaml"])
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Layered YAML configuration merging"

# Re-export commonly used functions for convenience
from yamlstack.exceptions import (
    MaterializationError,
    ParseError,
    ReadError,
    YamlStackError,
)
from yamlstack.materialize import materialize
from yamlstack.merger import (
    MultipleConfigurationMerger,
    load_configs,
    merge_configs,
)
from yamlstack.results import MergeResult, SkippedSource
from yamlstack.tree import fold_trees, merge_node

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "MultipleConfigurationMerger",
    "merge_configs",
    "load_configs",
    "materialize",
    "merge_node",
    "fold_trees",
    "MergeResult",
    "SkippedSource",
    "YamlStackError",
    "ReadError",
    "ParseError",
    "MaterializationError",
]

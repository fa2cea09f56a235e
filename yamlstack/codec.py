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

"""YAML parsing and serialization of configuration trees.

Uses PyYAML's safe loader and dumper, so only plain data (mappings,
sequences, scalars) ever enters or leaves a tree.
"""

from __future__ import annotations

from typing import Any

import yaml

from yamlstack.exceptions import ParseError


def parse_document(text: str, source: str | None = None) -> Any:
    """Parses YAML text into a configuration tree.

    Args:
        text: Raw document text.
        source: Optional identifier of where the text came from, used in
            error messages.

    Returns:
        The parsed tree, or None for an empty document (no content or only
        comments). An explicit ``{}`` parses to an empty dict, not None.

    Raises:
        ParseError: If the text is not valid YAML.
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as err:
        where = f"{source}: " if source else ""
        raise ParseError(f"Error parsing YAML: {where}{err}") from err


def dump_document(tree: Any) -> str:
    """Serializes a configuration tree to YAML text.

    Key order is kept as inserted (no sorting) and block style is used
    throughout.
    """
    return yaml.safe_dump(
        tree, default_flow_style=False, sort_keys=False, allow_unicode=True
    )

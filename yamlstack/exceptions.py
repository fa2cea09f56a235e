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

"""Exception hierarchy for yamlstack.

All exceptions inherit from YamlStackError so callers can catch every
library error with a single except clause. The document fold treats
ReadError and ParseError as "skip this document"; MaterializationError is
always surfaced to the caller.

Example:
    Catching specific error types:
        ```python
        from yamlstack import load_configs
        from yamlstack.exceptions import MaterializationError

        try:
            settings = load_configs(["base.yaml", "prod.yaml"], Settings)
        except MaterializationError as e:
            print(f"Merged config does not fit Settings: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "YamlStackError",
    "ReadError",
    "ParseError",
    "MaterializationError",
]


class YamlStackError(Exception):
    """Base exception for all yamlstack errors."""

    pass


class ReadError(YamlStackError):
    """Raised when a configuration document cannot be read.

    This covers:

    - Missing files or unknown resources
    - Permission and other OS-level read failures
    - Undecodable bytes (wrong encoding)
    - HTTP failures (connection errors, timeouts, non-2xx responses)
    """

    pass


class ParseError(YamlStackError):
    """Raised when a configuration document is not usable YAML.

    This covers YAML syntax errors and documents whose top level is not a
    mapping. An empty document is not an error; it parses to None.
    """

    pass


class MaterializationError(YamlStackError):
    """Raised when the merged tree cannot be coerced into the target type.

    Typical causes are a value of the wrong type or a required field that
    no document provided.
    """

    pass

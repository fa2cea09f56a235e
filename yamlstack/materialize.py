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

"""Conversion of a merged tree into a typed configuration object.

The merge knows nothing about the target type. The merged tree is dumped
to YAML and parsed back, so the typed object sees exactly what a single
hand-written document with the merged content would give, and the result
is validated into the target type with pydantic.

Any type pydantic can validate works as a target: dataclasses,
``pydantic.BaseModel`` subclasses and plain containers
such as ``dict[str, int]``.

Example:
    ```python
    from dataclasses import dataclass
    from yamlstack.materialize import materialize

    @dataclass
    class Server:
        host: str
        port: int = 8080

    server = materialize({"host": "example.com", "port": "9000"}, Server)
    # Server(host='example.com', port=9000)
    ```
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from yamlstack.codec import dump_document, parse_document
from yamlstack.exceptions import MaterializationError, ParseError

T = TypeVar("T")


def materialize(tree: Any, configuration_type: type[T]) -> T:
    """Re-serializes a tree and validates it into configuration_type.

    Args:
        tree: The merged configuration tree.
        configuration_type: The type to produce.

    Returns:
        An instance of configuration_type.

    Raises:
        MaterializationError: If the tree does not fit the type (wrong value
            types, missing required fields), or it does not survive the YAML
            round trip, or configuration_type is not a type pydantic can
            validate.
    """
    text = dump_document(tree)
    try:
        data = parse_document(text)
    except ParseError as err:
        raise MaterializationError(
            f"merged configuration could not be re-read: {err}"
        ) from err

    name = getattr(configuration_type, "__name__", repr(configuration_type))
    try:
        adapter = TypeAdapter(configuration_type)
    except PydanticSchemaGenerationError as err:
        raise MaterializationError(
            f"cannot materialize into {name}: unsupported configuration type"
        ) from err

    try:
        return adapter.validate_python(data)
    except ValidationError as err:
        raise MaterializationError(
            f"merged configuration does not match {name}: {err}"
        ) from err

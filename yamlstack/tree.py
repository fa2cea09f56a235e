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

"""Recursive merging of generic configuration trees.

A configuration tree is what a YAML document parses into: mappings (dict),
sequences (list) and scalars (everything else). This module merges a
*source* tree (an override document) into a *target* tree (the accumulated
result so far).

Merge Behavior:
    - **Source is None**: No change. An override that omits or nulls a key
        never erases an existing value.
    - **Target is None**: The source is adopted.
    - **Mapping + Mapping**: Merged key by key, in place. Existing keys keep
        their order; new keys are appended in the source's order.
    - **Sequence + Sequence**: Merged position by position, in place, up to
        the shorter length. Extra source elements are appended. The target
        never shrinks.
    - **Anything else**: The source wins (scalar overwrite or shape mismatch).

The Replace Flag:
    merge_node() returns ``(value, replace)``. A collection can only be
    replaced by whoever holds it (a dict entry, a list slot, the top-level
    accumulator), so the flag tells the caller whether to store ``value``
    into its slot or trust the in-place merge already performed.

    Adopted source values are copied with copy_tree(), so the target owns
    everything it holds. Later in-place merges never reach back into a source
    tree, and two keys aliasing one YAML anchor become independent values.

Example:
    ```python
    from yamlstack.tree import merge_node

    target = {"a": 1, "list": [1, 2, 3]}
    merged, replace = merge_node(target, {"b": 2, "list": [9, 9]})
    # merged is target: {"a": 1, "list": [9, 9, 3], "b": 2}; replace is False
    ```
"""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping, MutableSequence
from enum import Enum
from typing import Any

from yamlstack.exceptions import ParseError

__all__ = ["NodeKind", "node_kind", "copy_tree", "merge_node", "fold_trees"]


class NodeKind(Enum):
    """The three shapes a configuration tree node can take."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def node_kind(node: Any) -> NodeKind:
    """Classifies a tree node.

    Strings and bytes are scalars even though they are sequences in the
    Python sense; only mutable containers can be merged in place.

    Args:
        node: Any value from a parsed document (None included).

    Returns:
        The NodeKind of the node. None is classified as SCALAR; callers that
        care about absence check for None first.
    """
    if isinstance(node, MutableMapping):
        return NodeKind.MAPPING
    if isinstance(node, MutableSequence):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def copy_tree(node: Any, _ancestors: set[int] | None = None) -> Any:
    """Returns a copy of node with a fresh dict or list for every collection.

    Unlike copy.deepcopy there is no memo: a collection reached twice (YAML
    anchors and aliases) becomes two independent copies, so merging into
    one of them never shows up under the other key. Scalars are shared.

    Raises:
        ParseError: If the tree contains itself (a recursive alias).
    """
    kind = node_kind(node)
    if kind is NodeKind.SCALAR:
        return node

    ancestors = set() if _ancestors is None else _ancestors
    if id(node) in ancestors:
        raise ParseError("recursive YAML alias cannot be merged")
    ancestors.add(id(node))
    try:
        if kind is NodeKind.MAPPING:
            return {key: copy_tree(value, ancestors) for key, value in node.items()}
        return [copy_tree(item, ancestors) for item in node]
    finally:
        ancestors.discard(id(node))


def merge_node(target: Any, source: Any) -> tuple[Any, bool]:
    """Merges a source node into a target node.

    Args:
        target: The accumulated node. Mappings and sequences are mutated
            in place.
        source: The overriding node. Never mutated.

    Returns:
        A ``(value, replace)`` tuple. When ``replace`` is True the caller must
        store ``value`` (a copy of source) in the slot holding target. When
        False, ``value`` is target itself, already updated in place.
    """
    if source is None:
        return target, False
    if target is None:
        return copy_tree(source), True

    target_kind = node_kind(target)
    source_kind = node_kind(source)

    if target_kind is NodeKind.MAPPING and source_kind is NodeKind.MAPPING:
        _merge_mappings(target, source)
        return target, False
    if target_kind is NodeKind.SEQUENCE and source_kind is NodeKind.SEQUENCE:
        _merge_sequences(target, source)
        return target, False

    # Scalars and shape mismatches: last write wins
    return copy_tree(source), True


def _merge_mappings(
    target: MutableMapping[Any, Any], source: MutableMapping[Any, Any]
) -> None:
    """Merges source entries into target, appending new keys in source order."""
    for key, source_value in source.items():
        if key not in target:
            target[key] = copy_tree(source_value)
            continue
        value, replace = merge_node(target[key], source_value)
        if replace:
            target[key] = value


def _merge_sequences(
    target: MutableSequence[Any], source: MutableSequence[Any]
) -> None:
    """Merges source into target positionally, then appends source's tail.

    Indices past the end of a shorter source are left as they are.
    """
    original_length = len(target)
    for i in range(min(original_length, len(source))):
        value, replace = merge_node(target[i], source[i])
        if replace:
            target[i] = value
    for i in range(original_length, len(source)):
        target.append(copy_tree(source[i]))


def fold_trees(
    trees: Iterable[Any], accumulator: dict[Any, Any] | None = None
) -> dict[Any, Any]:
    """Folds already-parsed trees left to right into one mapping.

    Args:
        trees: Parsed documents in precedence order (later wins). None
            entries (empty documents) are skipped.
        accumulator: Mapping to merge into, mutated in place. A new empty
            dict is used when omitted.

    Returns:
        The accumulator.

    Raises:
        ParseError: If a tree is not a mapping; the accumulator is always
            rooted as a mapping.
    """
    config: dict[Any, Any] = {} if accumulator is None else accumulator
    for position, tree in enumerate(trees):
        if tree is None:
            continue
        if node_kind(tree) is not NodeKind.MAPPING:
            raise ParseError(
                f"document {position} must be a mapping at the top level, "
                f"got {type(tree).__name__}"
            )
        merge_node(config, tree)
    return config

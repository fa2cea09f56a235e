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

"""Folding of layered configuration documents.

A configuration is often split into a base document plus environment or
deployment overrides. MultipleConfigurationMerger reads each document in the
order given, parses it, and merges it into one accumulated mapping, so later
documents override earlier ones.

Pipeline (per path):
    1. Read text through the ConfigurationReader
    2. Parse YAML (an empty document is a no-op)
    3. Check the top level is a mapping
    4. Merge into the accumulator (see yamlstack.tree for the rules)

Error Handling:
    - A ReadError or ParseError skips that one document. It is logged at
        debug level and merging continues with what has been accumulated so
        far. Nothing is rolled back.
    - With ``strict=True`` those errors propagate instead.
    - MaterializationError from load_configs() always propagates.

Example:
    Merge to a plain dict:
        ```python
        from yamlstack.merger import merge_configs

        config = merge_configs(["config/base.yaml", "config/prod.yaml"])
        ```

    Merge into a typed object:
        ```python
        from yamlstack.merger import MultipleConfigurationMerger

        merger = MultipleConfigurationMerger()
        settings = merger.load_configs(["base.yaml", "prod.yaml"], Settings)
        ```
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from yamlstack.codec import dump_document, parse_document
from yamlstack.exceptions import ParseError, ReadError
from yamlstack.io.reader import ConfigurationReader, DefaultConfigurationReader
from yamlstack.logging import Logger, get_global_logger
from yamlstack.materialize import materialize
from yamlstack.results import MergeResult, SkippedSource
from yamlstack.tree import NodeKind, merge_node, node_kind

T = TypeVar("T")


class MultipleConfigurationMerger:
    """Merges configuration documents named by path identifiers.

    A merger holds no merge state between calls; every merge_configs() call
    starts from a fresh accumulator.
    """

    def __init__(
        self,
        configuration_reader: ConfigurationReader | None = None,
        *,
        logger: Logger | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize the merger.

        Args:
            configuration_reader: Source of document text (default:
                DefaultConfigurationReader, handling files and HTTP URLs).
            logger: Logger for diagnostics (default: global logger).
            strict: If True, read and parse errors propagate instead of
                skipping the document.
        """
        self._logger = logger or get_global_logger()
        self.configuration_reader = (
            configuration_reader or DefaultConfigurationReader(logger=self._logger)
        )
        self.strict = strict

    def merge_configs(self, paths: Iterable[str] | None) -> dict[Any, Any]:
        """Merges the documents at paths and returns the merged mapping.

        Args:
            paths: Path identifiers in precedence order (later wins). None is
                treated as an empty list.

        Returns:
            The merged configuration. Empty if no document could be merged.

        Raises:
            ReadError, ParseError: Only in strict mode.
        """
        return self.fold(paths).config

    def fold(self, paths: Iterable[str] | None) -> MergeResult:
        """Merges the documents at paths and reports what happened to each.

        Args:
            paths: Path identifiers in precedence order (later wins).

        Returns:
            MergeResult with the merged config and the merged, empty and
            skipped paths.

        Raises:
            ReadError, ParseError: Only in strict mode.
        """
        config: dict[Any, Any] = {}
        merged: list[str] = []
        empty: list[str] = []
        skipped: list[SkippedSource] = []

        for path in paths or ():
            try:
                applied = self.merge_config(config, path)
            except (ReadError, ParseError) as err:
                if self.strict:
                    raise
                # Not fatal: the document is skipped, earlier merges remain
                self._logger.debug("MERGE", f"Could not merge YAML at {path}: {err}")
                skipped.append(SkippedSource(path=path, reason=str(err)))
                continue
            if applied:
                self._logger.verbose("MERGE", f"Merged: {path}")
                merged.append(path)
            else:
                self._logger.verbose("MERGE", f"Empty document, skipped: {path}")
                empty.append(path)

        return MergeResult(
            config=config,
            merged=tuple(merged),
            empty=tuple(empty),
            skipped=tuple(skipped),
        )

    def merge_config(self, config: dict[Any, Any], path: str) -> bool:
        """Reads one document and merges it into config in place.

        Args:
            config: The accumulator to merge into.
            path: Path identifier of the override document.

        Returns:
            True if the document was merged, False if it was empty.

        Raises:
            ReadError: If the document could not be read.
            ParseError: If it is not valid YAML or its top level is not a
                mapping.
        """
        text = self.configuration_reader.read_configuration(path)
        overrides = parse_document(text, source=path)
        if overrides is None:
            return False
        if node_kind(overrides) is not NodeKind.MAPPING:
            raise ParseError(
                f"top-level YAML must be a mapping (dict): {path}, "
                f"got {type(overrides).__name__}"
            )
        merge_node(config, overrides)
        return True

    def load_configs(
        self, paths: Iterable[str] | None, configuration_type: type[T]
    ) -> T:
        """Merges the documents at paths and materializes configuration_type.

        The merge does not know about configuration_type. It produces a
        merged tree in memory, which is then dumped and re-parsed into the
        target type.

        Raises:
            MaterializationError: If the merged tree does not fit the type.
            ReadError, ParseError: Only in strict mode.
        """
        config = self.merge_configs(paths)
        self._debug_yaml(config)
        return materialize(config, configuration_type)

    def _debug_yaml(self, config: dict[Any, Any]) -> None:
        """Logs the merged tree line by line at debug level."""
        for line in dump_document(config).splitlines():
            if line.strip():
                self._logger.debug("MERGE", "  " + line)


def merge_configs(
    paths: Iterable[str] | None,
    reader: ConfigurationReader | None = None,
) -> dict[Any, Any]:
    """Merges documents with a default (non-strict) merger.

    Never raises for unreadable or malformed documents; they are skipped.
    """
    return MultipleConfigurationMerger(reader).merge_configs(paths)


def load_configs(
    paths: Iterable[str] | None,
    configuration_type: type[T],
    reader: ConfigurationReader | None = None,
) -> T:
    """Merges documents and materializes configuration_type.

    Raises:
        MaterializationError: If the merged tree does not fit the type.
    """
    return MultipleConfigurationMerger(reader).load_configs(
        paths, configuration_type
    )

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

"""Readers that turn a path identifier into configuration text.

A reader is anything with a ``read_configuration(path) -> str`` method that
raises ReadError when the document is missing or unreadable. The merger
only ever talks to this protocol, so callers decide how identifiers map to
real storage.

Readers:

- FileConfigurationReader: local files, optionally relative to a base dir
- UrlConfigurationReader: http:// and https:// via requests
- DefaultConfigurationReader: picks one of the above from the identifier

Example:
    ```python
    from pathlib import Path
    from yamlstack.io import FileConfigurationReader

    reader = FileConfigurationReader(base_dir=Path("config"))
    text = reader.read_configuration("base.yaml")  # reads config/base.yaml
    ```

Note:
    There are no retries. A failed read is reported once and the merger
    decides whether to skip the document or propagate.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol
from urllib.parse import unquote, urlparse

import requests

from yamlstack import __version__
from yamlstack.exceptions import ReadError
from yamlstack.logging import Logger, get_global_logger

_URL_SCHEMES = ("http", "https")


class ConfigurationReader(Protocol):
    """Protocol for configuration document readers."""

    def read_configuration(self, path: str) -> str:
        """Returns the text of the document identified by path.

        Raises:
            ReadError: If the document is missing or unreadable.
        """
        ...


class FileConfigurationReader:
    """Reads configuration documents from the local filesystem."""

    def __init__(
        self,
        base_dir: Path | None = None,
        encoding: str = "utf-8",
        logger: Logger | None = None,
    ) -> None:
        """Initialize the reader.

        Args:
            base_dir: Directory that relative paths are resolved against.
                Relative paths resolve against the working directory when
                omitted.
            encoding: Text encoding of the documents.
            logger: Logger for diagnostics (default: global logger).
        """
        self.base_dir = base_dir
        self.encoding = encoding
        self._logger = logger or get_global_logger()

    def resolve(self, path: str) -> Path:
        """Returns the filesystem path an identifier refers to."""
        p = Path(path).expanduser()
        if self.base_dir is not None and not p.is_absolute():
            p = self.base_dir / p
        return p

    def read_configuration(self, path: str) -> str:
        p = self.resolve(path)
        self._logger.debug("READ", f"Reading file: {p}")
        try:
            return p.read_text(encoding=self.encoding)
        except FileNotFoundError as err:
            raise ReadError(f"file not found: {p}") from err
        except (OSError, UnicodeDecodeError) as err:
            raise ReadError(f"could not read {p}: {err}") from err


def make_session() -> requests.Session:
    """Creates a requests.Session for fetching configuration documents.

    No retry adapter is mounted; a failed fetch fails once.
    """
    s = requests.Session()
    s.headers.update(
        {
            "User-Agent": f"yamlstack/{__version__}",
            "Accept": "application/yaml, text/yaml, text/plain, */*",
        }
    )
    return s


class UrlConfigurationReader:
    """Fetches configuration documents over HTTP(S)."""

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = 30.0,
        logger: Logger | None = None,
    ) -> None:
        """Initialize the reader.

        Args:
            session: Session to use (default: make_session(), created lazily).
            timeout: Per-request timeout in seconds.
            logger: Logger for diagnostics (default: global logger).
        """
        self._session = session
        self.timeout = timeout
        self._logger = logger or get_global_logger()

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = make_session()
        return self._session

    def read_configuration(self, path: str) -> str:
        self._logger.debug("HTTP", f"GET {path}")
        try:
            resp = self.session.get(path, timeout=self.timeout)
            resp.raise_for_status()
        except requests.HTTPError as err:
            raise ReadError(f"fetch failed for {path}: {err}") from err
        except requests.RequestException as err:
            raise ReadError(f"could not fetch {path}: {err}") from err
        self._logger.debug(
            "HTTP", f"{resp.status_code} {path} ({len(resp.content)} bytes)"
        )
        # Servers often omit a charset for YAML; requests would then guess
        # ISO-8859-1 from the text/* type.
        if "charset" not in resp.headers.get("Content-Type", ""):
            resp.encoding = "utf-8"
        return resp.text


class DefaultConfigurationReader:
    """Dispatches identifiers to a file or URL reader by scheme.

    - ``http://`` and ``https://`` go to the URL reader
    - ``file://`` URIs are converted to local paths
    - anything else is treated as a filesystem path
    """

    def __init__(
        self,
        file_reader: FileConfigurationReader | None = None,
        url_reader: UrlConfigurationReader | None = None,
        logger: Logger | None = None,
    ) -> None:
        logger = logger or get_global_logger()
        self.file_reader = file_reader or FileConfigurationReader(logger=logger)
        self.url_reader = url_reader or UrlConfigurationReader(logger=logger)

    def read_configuration(self, path: str) -> str:
        parsed = urlparse(path)
        scheme = parsed.scheme.lower()
        if scheme in _URL_SCHEMES:
            return self.url_reader.read_configuration(path)
        if scheme == "file":
            return self.file_reader.read_configuration(unquote(parsed.path))
        return self.file_reader.read_configuration(path)

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Union

import requests

from docsync.core.types.document import DocumentGraph
from docsync.utils.logger import logger


class ContentLoadError(RuntimeError):
    """The content graph could not be fetched or parsed."""


def is_url(source: Union[str, Path]) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def read_content_json(source: Union[str, Path], timeout: float = 30) -> Dict[str, object]:
    """Fetch the raw JSON document from a local path or an http(s) URL."""
    if is_url(source):
        try:
            response = requests.get(str(source), timeout=timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise ContentLoadError(f"Failed to fetch {source}: {exc}") from exc
        except ValueError as exc:
            raise ContentLoadError(f"Invalid JSON from {source}: {exc}") from exc
    else:
        path = Path(source).expanduser()
        if not path.is_file():
            raise ContentLoadError(f"Content file not found: {path}")
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise ContentLoadError(f"Failed to read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ContentLoadError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ContentLoadError(
            f"Content document must be a JSON object, got {type(payload).__name__}"
        )
    return payload


def load_content_graph(source: Union[str, Path], timeout: float = 30) -> DocumentGraph:
    logger.info("Loading content graph from %s", source)
    return DocumentGraph.from_dict(read_content_json(source, timeout=timeout))

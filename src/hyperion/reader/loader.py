"""
Loading of pipeline document files into a generic node tree.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from hyperion.core.exceptions.custom_exceptions import DocumentFormatError

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")


def load_document_tree(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML or JSON pipeline document.

    Args:
        file_path: Path of the document file

    Returns:
        Dict[str, Any]: Root mapping of the document

    Raises:
        DocumentFormatError: If the file is missing, has an unsupported
            suffix, cannot be parsed or its root is not a mapping
    """
    path = Path(file_path)

    if not path.is_file():
        raise DocumentFormatError(
            f"Document file not found: {file_path}",
            error_code="DOCUMENT_NOT_FOUND",
            details={"path": str(path)},
        )

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise DocumentFormatError(
            f"Unsupported document format: {path.suffix}",
            error_code="UNSUPPORTED_FORMAT",
            details={"path": str(path), "supported": list(SUPPORTED_SUFFIXES)},
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            if suffix == ".json":
                tree = json.load(f)
            else:
                tree = yaml.safe_load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise DocumentFormatError(
            f"Failed to load document: {e}",
            error_code="DOCUMENT_PARSE_ERROR",
            details={"path": str(path)},
        ) from e

    if not isinstance(tree, dict):
        raise DocumentFormatError(
            "The document root must be a mapping!",
            error_code="INVALID_DOCUMENT_ROOT",
            details={"path": str(path), "found": type(tree).__name__},
        )
    return tree

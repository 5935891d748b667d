"""YAML file helpers.

Writes go through a temporary file in the target directory that is
renamed over the destination, so a reader never sees a half-written
pipeline file.

Usage:
    from pathopt.utils import fs
    data = fs.load_yaml("pipeline.yaml")
    fs.save_yaml(data, "out/pipeline.yaml")
"""

import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Parse a YAML file with ``safe_load``.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed content; ``None`` for an empty file

    Raises
    ------
    FileNotFoundError
        If *path* does not exist
    yaml.YAMLError
        If the file is not valid YAML; the message names the file
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Invalid YAML in {path}: {e}") from e


def save_yaml(data: Dict[str, Any], path: Union[str, Path]) -> Path:
    """Write *data* as block-style YAML, replacing *path* atomically.

    Parent directories are created as needed.  Returns the written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    text = yaml.safe_dump(
        data, default_flow_style=False, sort_keys=False, allow_unicode=True,
    )
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return path

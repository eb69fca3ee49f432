"""JSON load and dump of simulation parameters."""

from __future__ import annotations

import logging
from pathlib import Path

from .types import Params

logger = logging.getLogger(__name__)


def load_params(path: str | Path) -> Params:
    """Load and validate parameters from a JSON file.

    Keys missing from the file take their defaults.

    Args:
        path: Path to the JSON parameter file.

    Returns:
        Validated Params.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the content is not valid JSON or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Parameter file not found: {path}")

    params = Params.model_validate_json(path.read_text(encoding="utf-8"))
    logger.debug("Loaded parameters from %s: grid %dx%d", path, params.nx, params.ny)
    return params


def dump_params(params: Params, path: str | Path) -> None:
    """Write parameters to a JSON file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(params.model_dump_json(indent=2), encoding="utf-8")
    logger.debug("Wrote parameters to %s", path)

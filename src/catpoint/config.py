"""YAML configuration for the catpoint command line."""

import logging
from pathlib import Path
from typing import Any

import yaml

from .const.defaults import DEFAULT_STORE_FILE
from .exceptions import CatpointInvalidParameterError
from .image import FakeImageClassifier

_LOGGER = logging.getLogger(__name__)


def load_config(config_path: str | Path) -> dict[str, Any]:
    """Load configuration from YAML file.

    A missing or empty file yields the defaults.

    Args:
        config_path: Path to config file

    Returns:
        Normalized configuration dictionary

    Raises:
        CatpointInvalidParameterError: If the file cannot be parsed or has an unknown shape
    """
    path = Path(config_path)
    if not path.exists():
        _LOGGER.debug(f"Config file {path} not found, using defaults")
        return normalize_config(None)

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise CatpointInvalidParameterError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatpointInvalidParameterError(f"Error parsing config {path}: {e}") from e

    return normalize_config(raw)


def normalize_config(raw: Any) -> dict[str, Any]:
    """Normalize YAML into a dict with a 'catpoint' mapping.

    Accepts these shapes:
    - {catpoint: {store, classifier}}
    - {store, classifier}
    - [{...}] (list with a single mapping)
    - None (defaults)

    Raises:
        CatpointInvalidParameterError: If the shape or a value is not understood
    """
    data = raw
    if isinstance(raw, list) and raw:
        data = raw[0]
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise CatpointInvalidParameterError(
            "Invalid config. Expected mapping with 'catpoint' section, e.g.\n"
            "catpoint:\n  store: catpoint_state.yaml\n  classifier:\n    result: true"
        )
    if "catpoint" in data:
        data = data["catpoint"] or {}
        if not isinstance(data, dict):
            raise CatpointInvalidParameterError("'catpoint' section must be a mapping")

    classifier = data.get("classifier") or {}
    if not isinstance(classifier, dict):
        raise CatpointInvalidParameterError("'classifier' must be a mapping")

    result = classifier.get("result")
    if result is not None and not isinstance(result, bool):
        raise CatpointInvalidParameterError(f"classifier.result must be true or false, got {result!r}")

    seed = classifier.get("seed")
    try:
        seed = int(seed) if seed is not None and str(seed).strip() != "" else None
    except ValueError as e:
        raise CatpointInvalidParameterError(f"classifier.seed must be an integer, got {seed!r}") from e

    store = data.get("store")
    return {
        "catpoint": {
            "store": str(store) if store else DEFAULT_STORE_FILE,
            "classifier": {"result": result, "seed": seed},
        }
    }


def build_classifier(config: dict[str, Any]) -> FakeImageClassifier:
    """Create the image classifier described by a normalized config."""
    cfg = config["catpoint"]["classifier"]
    return FakeImageClassifier(result=cfg["result"], seed=cfg["seed"])

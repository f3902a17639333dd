"""Analysis configuration: salary bands and reporting-depth limits."""

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from orgaudit.utils.io import FilePath, load_toml_config

type ConfigDict = dict[str, float | int]

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent
YAML_CONFIG = PROJECT_ROOT / "orgaudit.yaml"
PYPROJECT = PROJECT_ROOT / "pyproject.toml"


@dataclass(frozen=True)
class AnalysisPolicy:
    # A manager should earn at least min and at most max times the average
    # salary of their direct reports.
    min_manager_ratio: float = 1.20
    max_manager_ratio: float = 1.50
    max_reporting_depth: int = 4

    def __post_init__(self) -> None:
        if self.min_manager_ratio <= 0 or self.max_manager_ratio <= 0:
            raise ValueError("Manager salary ratios must be positive")
        if self.min_manager_ratio > self.max_manager_ratio:
            raise ValueError(
                f"min_manager_ratio ({self.min_manager_ratio}) exceeds "
                f"max_manager_ratio ({self.max_manager_ratio})"
            )
        if self.max_reporting_depth < 0:
            raise ValueError("max_reporting_depth cannot be negative")


def policy_from_dict(data: ConfigDict) -> AnalysisPolicy:
    known = {f.name for f in fields(AnalysisPolicy)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown analysis settings: {sorted(unknown)}")

    values = {}
    for key, value in data.items():
        match key, value:
            case "max_reporting_depth", int() if not isinstance(value, bool):
                values[key] = value
            case ("min_manager_ratio" | "max_manager_ratio"), int() | float() if not isinstance(value, bool):
                values[key] = float(value)
            case _:
                raise ValueError(f"Invalid value for {key}: {value!r}")
    return AnalysisPolicy(**values)


def _read_yaml(path: Path) -> ConfigDict:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}")
    return data.get("analysis", data)


def load_config(path: FilePath | None = None) -> AnalysisPolicy:
    """Resolve the analysis policy.

    An explicit YAML file wins, then ``orgaudit.yaml`` beside the project,
    then the ``[tool.orgaudit]`` table of ``pyproject.toml``. Defaults apply
    when none of these exist.
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file missing: {path}")
        logger.info("Loading analysis config from %s", path)
        return policy_from_dict(_read_yaml(path))

    if YAML_CONFIG.exists():
        logger.info("Loading analysis config from %s", YAML_CONFIG)
        return policy_from_dict(_read_yaml(YAML_CONFIG))

    if PYPROJECT.exists():
        data = load_toml_config(PYPROJECT).get("tool", {}).get("orgaudit", {})
        if data:
            logger.info("Loading analysis config from %s", PYPROJECT)
            return policy_from_dict(data)

    logger.debug("No analysis config found, using defaults")
    return AnalysisPolicy()

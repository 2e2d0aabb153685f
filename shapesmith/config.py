"""Configuration for Shapesmith readers.

Settings can be built in code or loaded from a YAML or JSON file:

    cache_capacity: 50
    target_crs: "EPSG:4326"
    fetch_timeout: 10
    whitelist: [geojson, kml]
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Union

import yaml

from shapesmith.primitives.classify import METADATA_MARKER
from shapesmith.primitives.spatial_reference import DEFAULT_TARGET_CRS, ProjectionMode
from shapesmith.utils.cache import DEFAULT_CAPACITY
from shapesmith.utils.errors import ParameterError, raise_parameter_error

logger = logging.getLogger(__name__)


@dataclass
class ShapesmithConfig:
    """Settings shared by the reader, fetcher and classifier.

    Attributes:
        cache_capacity: Number of string sources whose results are memoized.
        target_crs: CRS every layer is reprojected into.
        fetch_timeout: Per-request timeout in seconds for remote fetches.
        metadata_marker: Archive members containing this are skipped.
        whitelist: Extra extensions returned untouched as their own layers.
        archive_projection_mode: ProjectionMode for ``.prj`` members in archives.
        remote_projection_mode: ProjectionMode for ``.prj`` files fetched
            next to a base location.
        log_level: Level the CLI configures logging with.
    """

    cache_capacity: int = DEFAULT_CAPACITY
    target_crs: str = DEFAULT_TARGET_CRS
    fetch_timeout: float = 30.0
    metadata_marker: str = METADATA_MARKER
    whitelist: list[str] = field(default_factory=list)
    archive_projection_mode: str = ProjectionMode.STRICT.value
    remote_projection_mode: str = ProjectionMode.LENIENT.value
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.cache_capacity < 1:
            raise_parameter_error(
                "cache_capacity", self.cache_capacity, suggestion="Use a positive integer"
            )
        if self.fetch_timeout <= 0:
            raise_parameter_error(
                "fetch_timeout", self.fetch_timeout, suggestion="Use a positive number of seconds"
            )
        modes = [mode.value for mode in ProjectionMode]
        for name in ("archive_projection_mode", "remote_projection_mode"):
            value = getattr(self, name)
            if value not in modes:
                raise_parameter_error(name, value, valid_values=modes)
        self.whitelist = [str(item).lower().lstrip(".") for item in self.whitelist]

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> "ShapesmithConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ParameterError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                details={"valid_keys": sorted(known)},
            )
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config(path: Union[str, Path]) -> ShapesmithConfig:
    """Load a ShapesmithConfig from a YAML or JSON file.

    Args:
        path: ``.yaml``, ``.yml`` or ``.json`` file.

    Returns:
        Parsed configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ParameterError: If the file holds unknown keys or invalid values.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            values = json.load(f)
        else:
            values = yaml.safe_load(f)

    if values is None:
        values = {}
    if not isinstance(values, dict):
        raise ParameterError(f"Config file {path} must contain a mapping")

    logger.debug(f"Loaded configuration from {path}")
    return ShapesmithConfig.from_dict(values)

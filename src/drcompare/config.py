"""Configuration dataclasses for the comparison pipeline.

The enumerations that define the simulated grid live here together with the
random seed and the output options. All entry points build a structured
OmegaConf config from :class:`ComparisonConfig`, optionally merge a YAML file
and dotlist overrides on top, and validate the result before any data is
generated.

Key classes:
    - ComparisonConfig: Master config (enumerations, seed, output, logging)
    - OutputConfig: Artifact directory, file prefix, image formats
    - LoggingConfig: Root logger options forwarded to ``configure_logging``

Enumeration nesting order
-------------------------
Observations are generated as the cartesian product
``algorithms x analytes x dataset_types x metrics`` with ``algorithms``
outermost and ``metrics`` innermost. Random values are drawn in that row
order, so reordering any enumeration changes which value lands on which row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from drcompare.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHMS = (
    "PLS",
    "PCA",
    "DL",
    "FA",
    "FastICA",
    "KPCA",
    "IPCA",
    "SparsePCA",
    "Truncated SVD",
    "MDS",
    "LLE",
    "Isomap",
    "SE",
    "UMAP",
    "t-SNE",
    "MiniBatchDL",
    "MiniBatchSparsePCA",
)
DEFAULT_ANALYTES = ("DOX", "TYZ")
DEFAULT_DATASET_TYPES = ("Calibration", "Test")
DEFAULT_METRICS = ("MSE", "MAE", "MedAE", "R2")
DEFAULT_SEED = 123
DEFAULT_PREFIX = "Dimension_Reduction_Algorithms"

# Image formats matplotlib can write without extra backends
SUPPORTED_FORMATS = ("png", "pdf", "svg", "jpg")

ENUMERATION_FIELDS = ("algorithms", "analytes", "dataset_types", "metrics")


@dataclass
class OutputConfig:
    """Output options for exported artifacts.

    Parameters:
        dir: Directory receiving all artifacts.
        prefix: File name prefix, e.g. ``<prefix>_Comparison_Table.png``.
        formats: Image formats written for each figure.
        dpi: Resolution of raster images.
    """

    dir: str = "."
    prefix: str = DEFAULT_PREFIX
    formats: List[str] = field(default_factory=lambda: ["png"])
    dpi: int = 300


@dataclass
class LoggingConfig:
    """Root logger options.

    Parameters:
        level: Logging level name.
        file: Optional log file path.
        structured: Emit JSON log lines instead of plain text.
    """

    level: str = "INFO"
    file: Optional[str] = None
    structured: bool = False


@dataclass
class ComparisonConfig:
    """Master configuration for a comparison run.

    Parameters:
        algorithms: Algorithm labels (outermost enumeration).
        analytes: Analyte labels.
        dataset_types: Dataset split labels.
        metrics: Metric labels (innermost enumeration).
        seed: Seed for the single random generator used by the simulation.
        output: Artifact output options.
        logging: Logging options.
    """

    algorithms: List[str] = field(default_factory=lambda: list(DEFAULT_ALGORITHMS))
    analytes: List[str] = field(default_factory=lambda: list(DEFAULT_ANALYTES))
    dataset_types: List[str] = field(default_factory=lambda: list(DEFAULT_DATASET_TYPES))
    metrics: List[str] = field(default_factory=lambda: list(DEFAULT_METRICS))
    seed: int = DEFAULT_SEED
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def to_dictconfig(config: DictConfig | ComparisonConfig) -> DictConfig:
    """Return ``config`` as a structured DictConfig.

    Raises:
        ConfigurationError: If a field value does not match its declared type.
    """
    if not isinstance(config, ComparisonConfig):
        return config
    try:
        return OmegaConf.structured(config)
    except OmegaConfBaseException as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _check_enumeration(name: str, labels: Sequence[str]) -> None:
    if labels is None or len(labels) == 0:
        raise ConfigurationError(f"Enumeration '{name}' must contain at least one label")
    seen = set()
    duplicates = []
    for label in labels:
        if label in seen and label not in duplicates:
            duplicates.append(label)
        seen.add(label)
    if duplicates:
        raise ConfigurationError(f"Enumeration '{name}' contains duplicate labels: {duplicates}")


def validate_config(config: DictConfig | ComparisonConfig) -> None:
    """Validate enumerations, seed and output options.

    Parameters:
        config: Configuration to validate.

    Raises:
        ConfigurationError: If an enumeration is empty or has duplicate labels,
            the seed is not a non-negative integer, or the output formats are
            empty or unsupported.
    """
    config = to_dictconfig(config)

    for name in ENUMERATION_FIELDS:
        _check_enumeration(name, list(config[name]))

    seed = config.seed
    if isinstance(seed, bool) or not isinstance(seed, int) or seed < 0:
        raise ConfigurationError(f"seed must be a non-negative integer, got {seed!r}")

    formats = [str(f).lower() for f in config.output.formats]
    if not formats:
        raise ConfigurationError("output.formats must list at least one image format")
    unsupported = [f for f in formats if f not in SUPPORTED_FORMATS]
    if unsupported:
        raise ConfigurationError(f"Unsupported output formats {unsupported}. Valid: {SUPPORTED_FORMATS}")

    if not config.output.prefix:
        raise ConfigurationError("output.prefix must be non-empty")


def load_config(
    path: Optional[str | Path] = None,
    overrides: Optional[Sequence[str]] = None,
) -> DictConfig:
    """Build a validated configuration.

    Starts from the structured :class:`ComparisonConfig` defaults, merges an
    optional YAML file, then applies dotlist overrides
    (e.g. ``["seed=7", "output.dir=results"]``).

    Parameters:
        path: Optional YAML configuration file.
        overrides: Optional dotlist overrides applied last.

    Returns:
        Validated structured config.

    Raises:
        ConfigurationError: If the merged configuration is invalid.

    Examples:
        >>> cfg = load_config(overrides=["seed=7"])
        >>> cfg.seed
        7
    """
    base = OmegaConf.structured(ComparisonConfig)
    parts = [base]
    if path is not None:
        logger.info("Loading configuration from %s", path)
        parts.append(OmegaConf.load(Path(path)))
    if overrides:
        parts.append(OmegaConf.from_dotlist(list(overrides)))

    try:
        config = OmegaConf.merge(*parts)
    except OmegaConfBaseException as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    validate_config(config)
    return config


def get_enumerations(config: DictConfig | ComparisonConfig) -> Dict[str, List[str]]:
    """Return the four enumerations as plain lists, in nesting order."""
    return {name: [str(label) for label in getattr(config, name)] for name in ENUMERATION_FIELDS}


def config_to_yaml(config: DictConfig | ComparisonConfig) -> str:
    """Render a configuration as YAML text."""
    config = to_dictconfig(config)
    return OmegaConf.to_yaml(config)


__all__ = [
    "ComparisonConfig",
    "ConfigurationError",
    "LoggingConfig",
    "OutputConfig",
    "SUPPORTED_FORMATS",
    "config_to_yaml",
    "get_enumerations",
    "load_config",
    "to_dictconfig",
    "validate_config",
]

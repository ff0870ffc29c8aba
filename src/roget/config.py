"""
Configuration loading for the Roget parser.

Loads roget/schema/roget.yaml (or a caller-supplied file) and builds the
lookup structures the scanner and bloomer need. Word-class and flag codes in
the file are validated against the closed enums in roget.model.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Tuple, Union

import yaml

from roget.errors import ConfigError
from roget.model import UNPARSED, FlagTag, WordClass

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "schema" / "roget.yaml"

ORPHAN_POLICIES = ("error", "skip")


@dataclass
class ScannerOptions:
    """Settings for reading the source file."""

    encoding: str = "utf-8"
    errors: str = "replace"
    orphan_lines: str = "error"


@dataclass
class RogetConfig:
    """
    Complete parser configuration.

    word_class_names maps each recognised code to its long name; flag_markers
    is an ordered list of (literal marker, flag) pairs.
    """

    word_class_names: Dict[WordClass, str] = field(default_factory=dict)
    flag_markers: List[Tuple[str, FlagTag]] = field(default_factory=list)
    unparsed: str = UNPARSED
    scanner: ScannerOptions = field(default_factory=ScannerOptions)

    # Built by compile()
    word_class_pattern: Optional[Pattern[str]] = None

    def compile(self) -> "RogetConfig":
        """Build the word-class prefix regex, e.g. ^(Adj|Adv|...)\\."""
        if not self.word_class_names:
            raise ConfigError("At least one word class must be configured")
        # Longest first so a short code never shadows a longer one
        codes = sorted((wc.value for wc in self.word_class_names), key=len, reverse=True)
        alternatives = "|".join(re.escape(code) for code in codes)
        self.word_class_pattern = re.compile(rf"^({alternatives})\.")
        return self

    def summary(self) -> str:
        """Return a human-readable summary of the loaded configuration."""
        markers = ", ".join(f"{marker!r}->{flag.value}" for marker, flag in self.flag_markers)
        return (
            f"  - {len(self.word_class_names)} word classes\n"
            f"  - {len(self.flag_markers)} flag markers ({markers})\n"
            f"  - orphan lines: {self.scanner.orphan_lines}"
        )


def _require_list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _parse_word_classes(items: List[Any]) -> Dict[WordClass, str]:
    word_classes: Dict[WordClass, str] = {}
    for item in items:
        code = item.get("code") if isinstance(item, dict) else item
        try:
            word_class = WordClass(code)
        except ValueError:
            raise ConfigError(f"Word class binding references unknown code '{code}'") from None
        if word_class is WordClass.UNKNOWN:
            raise ConfigError("'Unknown' is the fallback word class and cannot be bound")
        if word_class in word_classes:
            raise ConfigError(f"Duplicate word class code '{code}'")
        name = item.get("name", code) if isinstance(item, dict) else code
        word_classes[word_class] = str(name)
    return word_classes


def _parse_flag_markers(items: List[Any]) -> List[Tuple[str, FlagTag]]:
    markers: List[Tuple[str, FlagTag]] = []
    for item in items:
        if not isinstance(item, dict) or "marker" not in item or "flag" not in item:
            raise ConfigError(f"Flag marker entry needs 'marker' and 'flag': {item!r}")
        marker = str(item["marker"])
        if not marker:
            raise ConfigError("Flag marker must not be empty")
        try:
            flag = FlagTag(item["flag"])
        except ValueError:
            raise ConfigError(f"Flag marker {marker!r} references unknown flag '{item['flag']}'") from None
        markers.append((marker, flag))
    return markers


def _parse_scanner(data: Any) -> ScannerOptions:
    if data is None:
        return ScannerOptions()
    if not isinstance(data, dict):
        raise ConfigError("'scanner' must be a mapping")
    options = ScannerOptions(
        encoding=str(data.get("encoding", "utf-8")),
        errors=str(data.get("errors", "replace")),
        orphan_lines=str(data.get("orphan_lines", "error")).lower(),
    )
    if options.orphan_lines not in ORPHAN_POLICIES:
        raise ConfigError(
            f"scanner.orphan_lines must be one of {', '.join(ORPHAN_POLICIES)}, "
            f"got '{options.orphan_lines}'"
        )
    return options


def config_from_dict(data: Dict[str, Any]) -> RogetConfig:
    """
    Build a validated configuration from already-loaded YAML data.

    Raises:
        ConfigError: If a code is unknown or a value has the wrong shape
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    placeholders = data.get("placeholders") or {}
    unparsed = str(placeholders.get("unparsed", UNPARSED))
    if not unparsed:
        raise ConfigError("placeholders.unparsed must not be empty")

    config = RogetConfig(
        word_class_names=_parse_word_classes(_require_list(data, "word_classes")),
        flag_markers=_parse_flag_markers(_require_list(data, "flag_markers")),
        unparsed=unparsed,
        scanner=_parse_scanner(data.get("scanner")),
    )
    return config.compile()


def load_config(path: Optional[Union[str, Path]] = None) -> RogetConfig:
    """
    Load and validate a configuration file.

    Args:
        path: YAML file to load (default: the packaged roget/schema/roget.yaml)

    Returns:
        RogetConfig ready for the scanner and bloomer

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If validation fails
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    config = config_from_dict(data or {})
    logger.debug(f"Loaded config from {config_path}\n{config.summary()}")
    return config

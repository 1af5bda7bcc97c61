"""Project configuration: the ``manifest_values`` section of ``config.yml``."""

# pwacheck:domain=config

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import yaml

from pwacheck.manifest.values import CHECK_IDS

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when ``config.yml`` contains an invalid ``manifest_values`` section."""


@dataclass(frozen=True)
class CheckConfig:
    """Which checks gate ``--strict`` and which are hidden from output.

    An empty ``required`` tuple means every evaluated check is required.
    """

    required: tuple[str, ...] = ()
    ignore: tuple[str, ...] = ()

    def is_required(self, check_id: str) -> bool:
        if check_id in self.ignore:
            return False
        return not self.required or check_id in self.required


def _parse_id_list(section: dict[str, object], key: str) -> tuple[str, ...]:
    raw = section.get(key, [])
    if raw is None:
        return ()
    if not isinstance(raw, list):
        msg = f"config.yml: manifest_values.{key} must be a list"
        raise ConfigError(msg)

    ids = tuple(str(item) for item in raw)
    unknown = [check_id for check_id in ids if check_id not in CHECK_IDS]
    if unknown:
        msg = (
            f"config.yml: unknown check id(s) {unknown} in manifest_values.{key}, "
            f"must be one of {list(CHECK_IDS)}"
        )
        raise ConfigError(msg)
    return ids


def load_check_config(project_root: Path) -> CheckConfig:
    """Load :class:`CheckConfig` from ``<project_root>/config.yml``.

    Falls back to defaults for a missing file, unreadable YAML, or a missing
    section. Unknown check ids raise :class:`ConfigError`.
    """
    config_path = project_root / "config.yml"
    if not config_path.is_file():
        return CheckConfig()

    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError):
        logger.warning("Failed to read config.yml, using default check config")
        return CheckConfig()

    if not isinstance(data, dict):
        return CheckConfig()

    section = data.get("manifest_values")
    if section is None:
        return CheckConfig()
    if not isinstance(section, dict):
        msg = "config.yml: manifest_values must be a mapping"
        raise ConfigError(msg)

    return CheckConfig(
        required=_parse_id_list(section, "required"),
        ignore=_parse_id_list(section, "ignore"),
    )

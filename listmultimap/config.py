"""Codec configuration for listmultimap."""

from enum import Enum
from typing import Optional
import os

import yaml

from listmultimap.exceptions import ConfigurationException
from listmultimap.logging import CONFIG, get_logger

_logger = get_logger(CONFIG)

CONFIG_ROOT_KEY = "listmultimap"


class YamlLayout(Enum):
    """Shape of a multimap written as YAML."""
    GROUPED = "GROUPED"
    ENTRIES = "ENTRIES"


class ByteOrder(Enum):
    """Byte order used by the binary serializer."""
    LITTLE_ENDIAN = "LITTLE_ENDIAN"
    BIG_ENDIAN = "BIG_ENDIAN"

    @property
    def struct_prefix(self) -> str:
        return "<" if self is ByteOrder.LITTLE_ENDIAN else ">"


def _parse_enum(enum_cls, value, field_name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        raise ConfigurationException(f"Invalid {field_name}: {value}")


class CodecConfig:
    """Configuration for the YAML codec and the binary serializer.

    Args:
        yaml_layout: ``GROUPED`` writes ``key: [values]`` mappings and keeps
            per-key order. ``ENTRIES`` writes a list of ``[key, value]``
            pairs and keeps the global entry order.
        byte_order: Byte order of binary payloads.
        sort_keys: Sort keys when writing grouped YAML.

    Example:
        >>> config = CodecConfig(yaml_layout=YamlLayout.ENTRIES)
        >>> dump_yaml(multimap, config)
    """

    def __init__(
        self,
        yaml_layout: YamlLayout = YamlLayout.GROUPED,
        byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN,
        sort_keys: bool = False,
    ):
        self._yaml_layout = yaml_layout
        self._byte_order = byte_order
        self._sort_keys = sort_keys
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self._yaml_layout, YamlLayout):
            raise ConfigurationException(f"Invalid yaml_layout: {self._yaml_layout}")
        if not isinstance(self._byte_order, ByteOrder):
            raise ConfigurationException(f"Invalid byte_order: {self._byte_order}")
        if not isinstance(self._sort_keys, bool):
            raise ConfigurationException("sort_keys must be a boolean")
        if self._sort_keys and self._yaml_layout is YamlLayout.ENTRIES:
            raise ConfigurationException(
                "sort_keys cannot be used with the ENTRIES layout"
            )

    @property
    def yaml_layout(self) -> YamlLayout:
        """Get the YAML layout."""
        return self._yaml_layout

    @yaml_layout.setter
    def yaml_layout(self, value: YamlLayout) -> None:
        self._yaml_layout = value
        self._validate()

    @property
    def byte_order(self) -> ByteOrder:
        """Get the binary byte order."""
        return self._byte_order

    @byte_order.setter
    def byte_order(self, value: ByteOrder) -> None:
        self._byte_order = value
        self._validate()

    @property
    def sort_keys(self) -> bool:
        """Get whether grouped YAML keys are sorted."""
        return self._sort_keys

    @sort_keys.setter
    def sort_keys(self, value: bool) -> None:
        self._sort_keys = value
        self._validate()

    def to_dict(self) -> dict:
        """Return this configuration as a plain dictionary."""
        return {
            "yaml_layout": self._yaml_layout.value,
            "byte_order": self._byte_order.value,
            "sort_keys": self._sort_keys,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CodecConfig":
        """Create CodecConfig from a dictionary."""
        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        return cls(
            yaml_layout=_parse_enum(
                YamlLayout, data.get("yaml_layout", "GROUPED"), "yaml_layout"
            ),
            byte_order=_parse_enum(
                ByteOrder, data.get("byte_order", "LITTLE_ENDIAN"), "byte_order"
            ),
            sort_keys=data.get("sort_keys", False),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "CodecConfig":
        """Load configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            CodecConfig instance.

        Raises:
            ConfigurationException: If the file cannot be read or parsed.
        """
        if not os.path.exists(yaml_path):
            raise ConfigurationException(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}", cause=e)
        except IOError as e:
            raise ConfigurationException(f"Failed to read configuration file: {e}", cause=e)

        _logger.debug("Loaded codec configuration from %s", yaml_path)
        return cls._from_document(data)

    @classmethod
    def from_yaml_string(cls, yaml_content: str) -> "CodecConfig":
        """Load configuration from a YAML string.

        Raises:
            ConfigurationException: If the YAML cannot be parsed.
        """
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}", cause=e)

        return cls._from_document(data)

    @classmethod
    def _from_document(cls, data: Optional[dict]) -> "CodecConfig":
        if data is None:
            data = {}

        if isinstance(data, dict) and CONFIG_ROOT_KEY in data:
            data = data[CONFIG_ROOT_KEY] or {}

        return cls.from_dict(data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodecConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"CodecConfig(yaml_layout={self._yaml_layout.value}, "
            f"byte_order={self._byte_order.value}, sort_keys={self._sort_keys})"
        )

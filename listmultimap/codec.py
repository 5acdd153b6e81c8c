"""Plain-data and YAML codecs for multimaps.

Two YAML layouts are supported (see :class:`~listmultimap.config.YamlLayout`):

Grouped, which keeps per-key order and the order of distinct keys::

    foo: [1, 3]
    bar: [2]

Entries, which also keeps the interleaving of keys::

    - [foo, 1]
    - [bar, 2]
    - [foo, 3]

:func:`load_yaml` accepts either layout. In the grouped layout a scalar
under a key is read as a single value.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
import os

import yaml

from listmultimap.config import CodecConfig, YamlLayout
from listmultimap.exceptions import IllegalArgumentException, SerializationException
from listmultimap.logging import CODEC, get_logger
from listmultimap.multimap import ImmutableListMultimap

_logger = get_logger(CODEC)


def to_dict(multimap: Any) -> Dict[Any, List[Any]]:
    """Return a new dict mapping each key to a list of its values."""
    multimap = ImmutableListMultimap.copy_of(multimap)
    return {key: list(values) for key, values in multimap.as_map().items()}


def from_dict(data: Mapping[Any, Iterable[Any]]) -> ImmutableListMultimap:
    """Build a multimap from a mapping of key to an iterable of values.

    Raises:
        IllegalArgumentException: If a key or value is None or a group is
            not iterable.
    """
    if not isinstance(data, Mapping):
        raise IllegalArgumentException(f"Expected a mapping, got {type(data).__name__}")
    builder = ImmutableListMultimap.builder()
    for key, values in data.items():
        if isinstance(values, (str, bytes)):
            raise IllegalArgumentException(
                f"Values for {key!r} must be a collection, not {type(values).__name__}"
            )
        try:
            builder.put_all(key, values)
        except TypeError as e:
            raise IllegalArgumentException(f"Values for {key!r} are not iterable", cause=e)
    return builder.build()


def to_entries(multimap: Any) -> List[Tuple[Any, Any]]:
    """Return all ``(key, value)`` pairs in entry order."""
    return list(ImmutableListMultimap.copy_of(multimap).entries())


def from_entries(entries: Iterable[Tuple[Any, Any]]) -> ImmutableListMultimap:
    """Build a multimap from ``(key, value)`` pairs."""
    return ImmutableListMultimap.builder().put_entries(entries).build()


def dump_yaml(multimap: Any, config: Optional[CodecConfig] = None) -> str:
    """Serialize a multimap to YAML.

    Args:
        multimap: Any multimap-capable object.
        config: Codec configuration selecting the layout.

    Returns:
        The YAML document.

    Raises:
        SerializationException: If a key or value cannot be represented
            by ``yaml.safe_dump``.
    """
    config = config or CodecConfig()
    if config.yaml_layout is YamlLayout.ENTRIES:
        document: Any = [[_thaw(key), value] for key, value in to_entries(multimap)]
    else:
        document = to_dict(multimap)

    try:
        text = yaml.safe_dump(
            document,
            sort_keys=config.sort_keys,
            default_flow_style=None,
            allow_unicode=True,
        )
    except yaml.YAMLError as e:
        raise SerializationException(f"Failed to write YAML: {e}", cause=e)

    _logger.debug("Dumped multimap as %s YAML", config.yaml_layout.value)
    return text


def load_yaml(yaml_content: str) -> ImmutableListMultimap:
    """Load a multimap from a YAML string in either layout.

    An empty document yields the empty multimap.

    Raises:
        SerializationException: If the YAML cannot be parsed, has an
            unexpected shape, or holds a null key or value.
    """
    try:
        document = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise SerializationException(f"Failed to parse YAML: {e}", cause=e)

    return _from_document(document)


def load_yaml_file(yaml_path: str) -> ImmutableListMultimap:
    """Load a multimap from a YAML file.

    Raises:
        SerializationException: If the file cannot be read or parsed.
    """
    if not os.path.exists(yaml_path):
        raise SerializationException(f"File not found: {yaml_path}")

    try:
        with open(yaml_path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SerializationException(f"Failed to parse YAML: {e}", cause=e)
    except IOError as e:
        raise SerializationException(f"Failed to read file: {e}", cause=e)

    _logger.debug("Loaded multimap from %s", yaml_path)
    return _from_document(document)


def _from_document(document: Any) -> ImmutableListMultimap:
    if document is None:
        return ImmutableListMultimap.of()

    builder = ImmutableListMultimap.builder()
    try:
        if isinstance(document, dict):
            for key, values in document.items():
                if isinstance(values, list):
                    builder.put_all(_freeze(key), values)
                else:
                    builder.put(_freeze(key), values)
        elif isinstance(document, list):
            for item in document:
                if not isinstance(item, list) or len(item) != 2:
                    raise SerializationException(
                        f"Expected a [key, value] pair, got {item!r}"
                    )
                builder.put(_freeze(item[0]), item[1])
        else:
            raise SerializationException(
                f"Expected a mapping or a list of pairs, got {type(document).__name__}"
            )
    except IllegalArgumentException as e:
        raise SerializationException(f"Invalid multimap document: {e}", cause=e)

    multimap = builder.build()
    _logger.debug("Loaded %d entries from YAML", multimap.size())
    return multimap


def _thaw(key: Any) -> Any:
    if isinstance(key, tuple):
        return [_thaw(item) for item in key]
    return key


def _freeze(key: Any) -> Any:
    # YAML flow sequences load as lists, which cannot be dict keys
    if isinstance(key, list):
        return tuple(_freeze(item) for item in key)
    return key

"""Component loggers for listmultimap.

Every component logs under the ``listmultimap`` logger, at DEBUG only:

=================================  ==========================================
Logger                             Records
=================================  ==========================================
``listmultimap.multimap``          one per non-empty ``build()``
``listmultimap.codec``             each YAML dump, load and file read
``listmultimap.config``            one per configuration file loaded
``listmultimap.serialization``     one per binary encode or decode
=================================  ==========================================

The library installs no handlers of its own.

Example:
    >>> import logging
    >>> from listmultimap.logging import configure_logging
    >>> root = configure_logging(level=logging.DEBUG)
"""

import logging
from typing import Optional

from listmultimap.exceptions import IllegalArgumentException

ROOT_LOGGER_NAME = "listmultimap"

MULTIMAP = "multimap"
CODEC = "codec"
CONFIG = "config"
SERIALIZATION = "serialization"

COMPONENTS = frozenset({MULTIMAP, CODEC, CONFIG, SERIALIZATION})

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(component: str = "") -> logging.Logger:
    """Return the logger of a listmultimap component.

    Args:
        component: One of :data:`COMPONENTS`, or empty for the root logger.

    Raises:
        IllegalArgumentException: If ``component`` is not a known component.
    """
    if not component:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if component not in COMPONENTS:
        raise IllegalArgumentException(
            f"Unknown logging component {component!r}, "
            f"expected one of {sorted(COMPONENTS)}"
        )
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")


def configure_logging(
    level: int = logging.INFO,
    handler: Optional[logging.Handler] = None,
    format_string: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Set the level of the ``listmultimap`` logger and give it a handler.

    The handler, a ``StreamHandler`` unless one is passed, is attached only
    when the root logger has none, so repeated calls just change the level.

    Returns:
        The root ``listmultimap`` logger.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    if not root.handlers:
        if handler is None:
            handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(format_string))
        root.addHandler(handler)
    return root

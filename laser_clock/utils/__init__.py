"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Config schema validation (validators)
    - YAML loading & atomic writes (fs)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (render, glyphs,
compose, hardware).

Convenience imports:
    from laser_clock.utils import fs, validators
    from laser_clock.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import logging_config
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    'fs',
    'logging_config',
    'validators',
    'get_logger',
    'push_context',
    'setup_logging',
]

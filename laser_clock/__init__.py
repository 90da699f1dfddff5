"""
Laser Clock Package.

Renders the wall-clock time as a continuous vector path for a
galvanometer laser projector driven by a Helios DAC. Digits emulate a
six-digit seven-segment display with two colon separators.

Subpackages:
    path_ir: Draw commands, colour palette and beam points
    render: Point buffer and path renderer (subdivision, dwell, clipping)
    glyphs: Digit, square and circle glyphs
    compose: Frame layout for HH:MM:SS
    configs: Configuration loading and validation
    hardware: Frame sinks, Helios DAC binding and the clock runner
    utils: YAML / atomic I/O, schema validation, logging
"""

__version__ = "1.0.0"

__all__ = ["path_ir", "render", "glyphs", "compose", "configs", "hardware", "utils"]

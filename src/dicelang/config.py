"""
Evaluator configuration.

Settings live in the ``[evaluator]`` table of a TOML file:

    [evaluator]
    max_dice = 500

Usage:
    from dicelang.config import load_config

    config = load_config(Path("dicelang.toml"))
    interpreter = Interpreter(config=config)
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MAX_DICE = 10_000


@dataclass(frozen=True)
class EvaluatorConfig:
    """Limits applied while evaluating expressions."""

    max_dice: int = DEFAULT_MAX_DICE  # Most dice a single roll may throw

    def __post_init__(self) -> None:
        # bool is an int subclass; TOML `true` must not pass as 1
        if not isinstance(self.max_dice, int) or isinstance(self.max_dice, bool):
            raise ValueError(
                f"max_dice must be an integer, got {type(self.max_dice).__name__} {self.max_dice!r}"
            )
        if self.max_dice < 0:
            raise ValueError(f"max_dice must be non-negative, got {self.max_dice}")


def load_config(path: Path) -> EvaluatorConfig:
    """Read an EvaluatorConfig from the ``[evaluator]`` table of a TOML file.

    Missing keys take their defaults; unknown keys are logged and ignored.

    Raises:
        FileNotFoundError: If the file does not exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
        ValueError: If a setting is out of range.
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    section = data.get("evaluator", {})

    known = {f.name for f in fields(EvaluatorConfig)}
    for key in section:
        if key not in known:
            logger.warning("Ignoring unknown evaluator setting '%s' in %s", key, path)

    return EvaluatorConfig(max_dice=section.get("max_dice", DEFAULT_MAX_DICE))

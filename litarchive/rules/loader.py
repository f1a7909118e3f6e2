import logging
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from litarchive.rules.models import Rules

logger = logging.getLogger(__name__)

_FENCED_YAML = re.compile(r"^\s*```ya?ml\s*$(.*?)^\s*```", re.MULTILINE | re.DOTALL)


def extract_rules_text(text: str) -> str:
    """Return the first fenced yaml block of a markdown document, or the text unchanged."""
    match = _FENCED_YAML.search(text)
    return match.group(1) if match else text


def parse_rules(text: str, source: str = "<string>") -> Rules:
    try:
        data = yaml.safe_load(extract_rules_text(text))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in {source}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Rules validation failed for {source}: expected a mapping")

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed for {source}:\n{e}") from e


def load_rules(path: Path | str) -> Rules:
    """
    Load and validate the archive rules (rules.yaml, or a markdown file with
    a ```yaml block).

    Raises FileNotFoundError if the file is missing, ValueError on bad YAML
    or a schema violation.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    rules = parse_rules(path.read_text(encoding="utf-8"), source=str(path))
    logger.debug(
        "Loaded rules from %s (moderated kinds: %s, visitor window: %s)",
        path,
        ", ".join(k.value for k in rules.content.moderated_kinds),
        rules.visitors.window,
    )
    return rules

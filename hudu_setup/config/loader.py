"""
Configuration loader for the setup package.

Loads configuration from:
- Answers file (YAML or JSON) for non-interactive runs
- An existing .env file, for auditing with --check
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from pydantic import ValidationError

from hudu_setup.config.schema import WizardAnswers
from hudu_setup.errors import ConfigFileError
from hudu_setup.utils.logger import logger


def _scan_value(text: str, pos: int) -> Tuple[str, int]:
    """
    Read one value starting at `pos`.

    Adjacent single-quoted, double-quoted and bare segments are concatenated,
    the way a POSIX shell joins them into one word. Single-quoted segments
    are taken literally and may span lines.

    Returns:
        Tuple of (value, position of the terminating newline or end of text)
    """
    out = []
    n = len(text)

    while pos < n:
        ch = text[pos]
        if ch == "\n":
            break
        if ch == "'":
            end = text.find("'", pos + 1)
            if end == -1:
                raise ValueError("Unterminated single-quoted value")
            out.append(text[pos + 1:end])
            pos = end + 1
        elif ch == '"':
            pos += 1
            while True:
                if pos >= n:
                    raise ValueError("Unterminated double-quoted value")
                c = text[pos]
                if c == '"':
                    pos += 1
                    break
                if c == "\\" and pos + 1 < n and text[pos + 1] in '"\\':
                    out.append(text[pos + 1])
                    pos += 2
                    continue
                out.append(c)
                pos += 1
        elif ch in " \t\r":
            # Unquoted whitespace ends the value; only a comment may follow
            end = text.find("\n", pos)
            end = n if end == -1 else end
            rest = text[pos:end].strip()
            if rest and not rest.startswith("#"):
                raise ValueError(f"Unexpected text after value: {rest!r}")
            pos = end
            break
        else:
            out.append(ch)
            pos += 1

    return "".join(out), pos


def unescape_value(raw: str) -> str:
    """
    Decode a value written by escape_value back to the original string.

    Args:
        raw: The text after KEY=

    Returns:
        The decoded value
    """
    value, pos = _scan_value(raw, 0)
    if pos < len(raw):
        raise ValueError("Unquoted newline in value")
    return value


def parse_env_text(text: str) -> Dict[str, str]:
    """
    Parse dotenv content into an ordered dictionary of key-value pairs.

    Blank lines and comment lines are skipped. An optional `export ` prefix
    on a key is ignored.
    """
    env_vars: Dict[str, str] = {}
    pos = 0
    n = len(text)

    while pos < n:
        line_end = text.find("\n", pos)
        line_end = n if line_end == -1 else line_end
        line = text[pos:line_end].strip()

        if not line or line.startswith("#") or "=" not in line:
            pos = line_end + 1
            continue

        eq = text.index("=", pos)
        key = text[pos:eq].strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()

        value, pos = _scan_value(text, eq + 1)
        env_vars[key] = value
        pos += 1

    return env_vars


class ConfigLoader:
    """Load configuration from various sources."""

    def __init__(self, root_dir: Optional[str] = None):
        """
        Initialize the config loader.

        Args:
            root_dir: Directory relative paths are resolved against. Defaults to current directory.
        """
        self.root_dir = Path(root_dir) if root_dir else Path.cwd()

    def _resolve(self, filepath: str) -> Path:
        path = Path(filepath)
        if not path.is_absolute():
            path = self.root_dir / path
        return path

    def parse_env_file(self, filepath: str) -> Dict[str, str]:
        """
        Parse a .env file and return a dictionary of key-value pairs.

        Args:
            filepath: Path to the .env file

        Returns:
            Dictionary of environment variables (empty if the file does not exist)

        Raises:
            ConfigFileError: If the file cannot be read or parsed
        """
        full_path = self._resolve(filepath)

        if not full_path.exists():
            return {}

        try:
            text = full_path.read_text(encoding="utf-8")
            return parse_env_text(text)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            raise ConfigFileError(f"Cannot parse {full_path}: {e}") from e

    def load_from_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load answers from a YAML or JSON config file.

        Args:
            config_path: Path to the config file

        Returns:
            Configuration dictionary

        Raises:
            ConfigFileError: If the file is missing or cannot be parsed
        """
        path = self._resolve(config_path)

        if not path.exists():
            raise ConfigFileError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix in [".yaml", ".yml"]:
                    data = yaml.safe_load(f)
                elif path.suffix == ".json":
                    data = json.load(f)
                else:
                    # JSON is a subset of YAML
                    data = yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigFileError(f"Cannot parse {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigFileError(f"{path} must contain a mapping at the top level")
        return data

    def load_answers(self, config_file: Optional[str] = None) -> WizardAnswers:
        """
        Build the initial answers for a wizard run.

        Without a config file every answer starts empty and is prompted for.

        Args:
            config_file: Optional path to an answers file

        Returns:
            WizardAnswers instance
        """
        if not config_file:
            return WizardAnswers()

        data = self.load_from_config_file(config_file)
        if isinstance(data.get("storage"), str):
            data["storage"] = data["storage"].strip().lower()

        try:
            answers = WizardAnswers(**data)
        except ValidationError as e:
            raise ConfigFileError(f"Invalid config file {config_file}: {e}") from e

        logger.debug(
            "answers_loaded",
            source=str(config_file),
            fields=sorted(k for k, v in data.items() if v),
        )
        return answers

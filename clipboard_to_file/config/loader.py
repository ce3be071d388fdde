"""YAML config loading with env var expansion and legacy extensions.txt support."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from pydantic import ValidationError

from clipboard_to_file.errors import ConfigError

from .models import DEFAULT_EXTENSIONS, ClipToFileConfig, normalize_extension

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "clipboard-to-file.yaml"

_BAD_EXTENSION_CHARS = re.compile(r'[\\/:*?"<>|]')


@dataclass
class ExtensionsFile:
    """Entries read from an extensions.txt file."""

    extensions: list[str] = field(default_factory=list)
    bad_lines: int = 0


@dataclass
class LoadedConfig:
    """A validated config plus where it came from."""

    config: ClipToFileConfig
    source: Path | None = None
    extensions_path: Path | None = None
    bad_extension_lines: int = 0


def candidate_paths(cli_path: str | None = None) -> list[Path]:
    """Config locations in resolution order: CLI > project-local > user-global."""
    paths = [
        Path(cli_path) if cli_path else None,
        Path(".") / CONFIG_FILENAME,
        Path.home() / ".clipboard-to-file" / "config.yaml",
    ]
    return [p for p in paths if p is not None]


def load_config_report(cli_path: str | None = None) -> LoadedConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    if cli_path and not Path(cli_path).exists():
        raise ConfigError(f"Config file not found: {cli_path}")

    for path in candidate_paths(cli_path):
        if not path.exists():
            continue
        try:
            with open(path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
            if raw is None:
                continue
            if not isinstance(raw, dict):
                raise ConfigError(f"Invalid config in {path}: top level must be a mapping")
            raw = _expand_env_vars(raw)
            config = ClipToFileConfig(**raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise ConfigError(f"{path} is not valid UTF-8: {e}") from e
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {path}: {e}") from e
        logger.debug("loaded config from %s", path)
        return _apply_extensions_file(LoadedConfig(config=config, source=path))

    return _apply_extensions_file(LoadedConfig(config=ClipToFileConfig()))


def load_config(cli_path: str | None = None) -> ClipToFileConfig:
    return load_config_report(cli_path).config


def _apply_extensions_file(loaded: LoadedConfig) -> LoadedConfig:
    """Replace allowed_extensions with the entries of extensions_file, if set."""
    name = loaded.config.extensions_file
    if not name:
        return loaded
    path = Path(name).expanduser()
    if not path.is_absolute() and loaded.source is not None:
        path = loaded.source.parent / path
    try:
        ext_file = read_extensions_file(path)
    except OSError as e:
        raise ConfigError(f"Could not open {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path} is not valid UTF-8: {e}") from e

    classifier = loaded.config.classifier.model_copy(
        update={"allowed_extensions": ext_file.extensions}
    )
    loaded.config = loaded.config.model_copy(update={"classifier": classifier})
    loaded.extensions_path = path
    loaded.bad_extension_lines = ext_file.bad_lines
    return loaded


def parse_extensions(text: str) -> ExtensionsFile:
    """Parse extensions.txt content: one entry per line, ``#`` and ``//`` comments."""
    result = ExtensionsFile()
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(("#", "//")):
            continue
        if _BAD_EXTENSION_CHARS.search(line):
            result.bad_lines += 1
            continue
        ext = normalize_extension(line)
        if ext not in result.extensions:
            result.extensions.append(ext)
    if result.bad_lines:
        logger.warning("skipped %d invalid extension line(s)", result.bad_lines)
    return result


def read_extensions_file(path: str | Path) -> ExtensionsFile:
    return parse_extensions(Path(path).read_text(encoding="utf-8"))


def write_default_extensions(path: str | Path) -> bool:
    """Seed *path* with the default extension list. Returns False if it exists."""
    path = Path(path)
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{ext}\n" for ext in DEFAULT_EXTENSIONS), encoding="utf-8")
    logger.info("wrote default extensions to %s", path)
    return True


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `clipboard-to-file config init`
DEFAULT_CONFIG_TEMPLATE = """\
# clipboard-to-file.yaml

enabled: true

# Filename heuristics
classifier:
  allowed_extensions: [".txt", ".md", ".log", ".sql", ".cpp", ".h", ".js", ".json", ".xml"]
  # Tried in order against the first line; group 1 is the filename,
  # the remaining lines become the file's content.
  content_regexes: []
  #  - '^(.*\\.[a-zA-Z0-9]+)$'
  word_count_limit: 5

# extensions_file: "extensions.txt"   # replaces allowed_extensions when set

features:
  create_empty: true
  create_with_content: true
  create_tree: true
  skip_existing_dirs: true
  auto_create_parent_dirs: true

materialize:
  large_tree_threshold: 10     # ask before creating more entities than this
  max_rename_attempts: 1000
  max_temp_attempts: 100

destination:
  paths: []                    # empty = current working directory
  policy: "single"             # single | first

clipboard:
  poll_interval: 0.5

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""

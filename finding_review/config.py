"""Configuration loading and validation.

Usage:
    config = load("review-config.yaml")       # raises ConfigError on bad config
    config.report_source                      # "reports/report.csv"
    generate_template("review-config.yaml")   # writes example file to disk
"""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = "review-config.yaml"
DEFAULT_EXPORT_PATH = "validated_report.csv"
DEFAULT_TIMEOUT = 30


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------

@dataclass
class Config:
    report_source: str
    timeout: int = DEFAULT_TIMEOUT
    page_count: int | None = None
    export_path: str = DEFAULT_EXPORT_PATH


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str = DEFAULT_CONFIG_PATH, source_override: str | None = None) -> Config:
    """Load and validate configuration from a YAML file.

    *source_override* (the --report option), then the REVIEW_REPORT_SOURCE
    environment variable, take precedence over ``report.source``.

    Raises:
        ConfigError: if the file is missing, malformed, or required fields
                     are absent.
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(
            f"Config file not found: '{config_path}'\n"
            "Run `finding-review init` to generate a template."
        )

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{config_path}': {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"'{config_path}' must be a YAML mapping at the top level.")

    report   = raw.get("report") or {}
    document = raw.get("document") or {}
    export   = raw.get("export") or {}

    source = (
        source_override
        or os.environ.get("REVIEW_REPORT_SOURCE")
        or report.get("source", "")
    )

    config = Config(
        report_source=str(source).strip(),
        timeout=report.get("timeout", DEFAULT_TIMEOUT),
        page_count=document.get("pages"),
        export_path=str(export.get("path") or DEFAULT_EXPORT_PATH),
    )
    _validate(config)
    return config


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _validate(config: Config) -> None:
    """Raise ConfigError if required fields are missing or out of range."""
    errors: list[str] = []

    if not config.report_source:
        errors.append(
            "  - 'report.source' is missing (or set the REVIEW_REPORT_SOURCE environment variable)"
        )
    if not _is_positive_int(config.timeout):
        errors.append("  - 'report.timeout' must be a positive integer (seconds)")
    if config.page_count is not None and not _is_positive_int(config.page_count):
        errors.append("  - 'document.pages' must be a positive integer")

    if errors:
        raise ConfigError("Invalid configuration:\n" + "\n".join(errors))


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = """\
report:
  source: "report.csv"            # File path or http(s) URL of the findings report
  timeout: 30                     # Seconds, for http(s) sources

document:
  # Total page count of the reviewed document. When omitted, the highest
  # page referenced by a finding is used.
  # pages: 120

export:
  path: "validated_report.csv"
"""


def generate_template(output_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write a template review-config.yaml to *output_path*.

    Raises:
        ConfigError: if the file already exists.
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")

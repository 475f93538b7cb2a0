"""YAML policy document loader.

PolicyLoader reads policy documents (see
:mod:`permission_graph.config.models` for the schema) from files,
strings or already-parsed dicts and validates them into
:class:`PolicyDocument` instances.

Example
-------
::

    loader = PolicyLoader()
    document = loader.load("policy.yaml")
    results = document.compile()
    results["analysts"].graph
"""
from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from permission_graph.config.models import PolicyDocument

logger = logging.getLogger(__name__)


class PolicyConfigError(ValueError):
    """Raised when a policy document is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the document that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class PolicyLoader:
    """Loads :class:`PolicyDocument` objects from YAML.

    Parameters
    ----------
    strict:
        When ``True``, unknown top-level keys are treated as an error.
        Default ``False`` (unknown keys are kept as extras).
    """

    _KNOWN_TOP_KEYS: frozenset[str] = frozenset(
        ["version", "description", "compiler", "groups"]
    )

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def load(self, config_path: str | Path) -> PolicyDocument:
        """Load a policy document from a YAML file on disk.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        PolicyConfigError
            If the file cannot be parsed or fails validation.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Policy document not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as fh:
            text = fh.read()
        return self.load_string(text, config_path=str(config_path))

    def load_string(
        self,
        yaml_string: str,
        config_path: str | None = None,
    ) -> PolicyDocument:
        """Load a policy document from a YAML string."""
        try:
            raw: object = yaml.safe_load(yaml_string) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(f"Failed to parse YAML: {exc}", config_path) from exc
        return self.load_from_dict(raw, config_path=config_path)  # type: ignore[arg-type]

    def load_from_dict(
        self,
        config: dict[str, object],
        config_path: str | None = None,
    ) -> PolicyDocument:
        """Validate an already-parsed policy dict."""
        if not isinstance(config, dict):
            raise PolicyConfigError("Policy document must be a YAML mapping (dict).", config_path)

        if self._strict:
            unknown_keys = set(config.keys()) - self._KNOWN_TOP_KEYS
            if unknown_keys:
                raise PolicyConfigError(
                    f"Unknown top-level keys: {sorted(unknown_keys)}. "
                    f"Known keys: {sorted(self._KNOWN_TOP_KEYS)}.",
                    config_path,
                )

        try:
            document = PolicyDocument.model_validate(config)
        except ValidationError as exc:
            raise PolicyConfigError(f"Invalid policy document: {exc}", config_path) from exc

        logger.info(
            "Loaded %d permission group(s) from %s (on_error=%s)",
            len(document.groups),
            config_path or "<dict>",
            document.compiler.on_error,
        )
        return document

    def defaults(self) -> PolicyDocument:
        """Return an empty document with all defaults applied."""
        return PolicyDocument()

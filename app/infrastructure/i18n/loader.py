"""Translation loading interface and implementations.

Defines the contract for loading message bundles and provides a YAML-based
loader.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml

from infrastructure.i18n.errors import CatalogError
from infrastructure.logging import get_module_logger

logger = get_module_logger()

ROOT_BUNDLE = ""


class TranslationLoader(ABC):
    """Abstract base for translation loaders.

    A bundle is the flat mapping of message codes to message templates for
    one bundle key: a locale tag ("zh-CN"), a language ("zh") or the root
    bundle (ROOT_BUNDLE).
    """

    @abstractmethod
    def load(self, bundle_key: str) -> Optional[Dict[str, str]]:
        """Load the bundle for a key.

        Args:
            bundle_key: Locale tag, language code or ROOT_BUNDLE.

        Returns:
            Mapping of code to template, or None when no source exists for
            the key.

        Raises:
            CatalogError: If a source exists but cannot be read or parsed.
        """

    @abstractmethod
    def available_bundles(self) -> list[str]:
        """List the non-root bundle keys that have at least one source."""


class YAMLTranslationLoader(TranslationLoader):
    """Loader for YAML message files.

    For a base name "locales/messages" the bundle "zh-CN" is read from
    "locales/messages.zh-CN.yml" and the root bundle from
    "locales/messages.yml", both relative to root_dir. When several base
    names define the same code, the later base name wins.

    Nested mappings are flattened into dotted codes:

        user:
          not_found: "User {0} not found"

    yields the code "user.not_found".

    Attributes:
        root_dir: Directory the base names are relative to.
        base_names: Catalog base names in override order.
        encoding: File encoding.
    """

    def __init__(
        self,
        root_dir: Path,
        base_names: Sequence[str],
        encoding: str = "utf-8",
    ):
        self.root_dir = Path(root_dir)
        self.base_names = list(base_names)
        self.encoding = encoding

        if not self.root_dir.exists():
            raise ValueError(f"Catalog directory not found: {self.root_dir}")

        logger.info(
            "initialized_yaml_loader",
            root_dir=str(self.root_dir),
            base_names=self.base_names,
            encoding=encoding,
        )

    def _bundle_path(self, base_name: str, bundle_key: str) -> Path:
        suffix = f".{bundle_key}.yml" if bundle_key else ".yml"
        return self.root_dir / f"{base_name}{suffix}"

    def load(self, bundle_key: str) -> Optional[Dict[str, str]]:
        messages: Dict[str, str] = {}
        found = False

        for base_name in self.base_names:
            path = self._bundle_path(base_name, bundle_key)
            if not path.is_file():
                continue

            found = True
            try:
                with open(path, "r", encoding=self.encoding) as f:
                    data = yaml.safe_load(f)
            except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
                logger.error("catalog_read_error", file=str(path), error=str(e))
                raise CatalogError(f"Failed to read {path}: {e}") from e

            if data is None:
                continue
            if not isinstance(data, dict):
                logger.warning("invalid_yaml_format", file=str(path), expected="dict")
                continue

            self._flatten_into(messages, data, prefix="", source_file=path)

        if not found:
            return None

        logger.info(
            "loaded_translations",
            bundle=bundle_key or "root",
            message_count=len(messages),
        )
        return messages

    def available_bundles(self) -> list[str]:
        keys: list[str] = []
        for base_name in self.base_names:
            base_path = self.root_dir / base_name
            for path in sorted(base_path.parent.glob(f"{base_path.name}.*.yml")):
                # "messages.zh-CN.yml" -> "zh-CN"
                key = path.name[len(base_path.name) + 1 : -len(".yml")]
                if key and "." not in key and key not in keys:
                    keys.append(key)
        return keys

    def _flatten_into(
        self,
        messages: Dict[str, str],
        data: Dict[Any, Any],
        prefix: str,
        source_file: Path,
    ) -> None:
        for key, value in data.items():
            code = f"{prefix}{key}"
            if isinstance(value, dict):
                self._flatten_into(messages, value, f"{code}.", source_file)
            elif isinstance(value, (list, tuple)):
                logger.warning(
                    "invalid_message_format",
                    code=code,
                    file=str(source_file),
                    expected="scalar",
                )
            elif value is not None:
                messages[code] = str(value)

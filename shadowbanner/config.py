"""
Configuration files.

 - font config: YAML/JSON mapping of extra fonts merged over the built-ins
 - batch specs: YAML/JSON list of banners rendered by `shadowbanner batch`
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

import yaml

from .errors import ConfigError
from .font import FontConfig, FontSpec, default_font_config, file_loader

logger = logging.getLogger(__name__)

# ==================== FILE IO ====================

def _is_yaml(path: str) -> bool:
    return path.endswith(".yaml") or path.endswith(".yml")


def read_document(path: str) -> Any:
    """Load a YAML or JSON document, chosen by file extension"""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if _is_yaml(path):
                return yaml.safe_load(fh)
            return json.load(fh)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot parse {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e


def write_document(path: str, data: Any) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        if _is_yaml(path):
            yaml.dump(data, fh, default_flow_style=False, sort_keys=False,
                      allow_unicode=True)
        else:
            json.dump(data, fh, indent=2, ensure_ascii=False)


# ==================== FONT CONFIG ====================

def _positive_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{what} must be a positive integer, got {value!r}")
    return value


def parse_font_config(data: Any, base_dir: str = ".") -> FontConfig:
    """FontConfig from an already loaded document; relative paths use base_dir"""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("font config must be a mapping")

    fonts = data.get("fonts") or {}
    if not isinstance(fonts, dict):
        raise ConfigError("'fonts' must be a mapping of name -> font entry")

    config = FontConfig()
    for name, entry in fonts.items():
        if not isinstance(entry, dict) or not entry.get("path"):
            raise ConfigError(f"font {name!r} needs a 'path'")
        path = os.path.join(base_dir, os.path.expanduser(str(entry["path"])))
        size = _positive_int(entry.get("size", 8), f"font {name!r} size")
        height = entry.get("height")
        if height is not None:
            height = _positive_int(height, f"font {name!r} height")
        config.add(FontSpec(str(name), file_loader(path), size=size, height=height))

    if "default" in data:
        config.default = str(data["default"])
    return config


def load_font_config(path: Optional[str] = None) -> FontConfig:
    """Built-in fonts, extended by the fonts declared in path"""
    config = default_font_config()
    if not path:
        return config

    data = read_document(path)
    extra = parse_font_config(data, base_dir=os.path.dirname(os.path.abspath(path)))
    if not isinstance(data, dict) or "default" not in data:
        extra.default = config.default
    merged = config.merged(extra)
    if merged.default not in merged.fonts:
        raise ConfigError(f"default font {merged.default!r} is not configured")

    logger.debug("loaded font config %s: %s (default %s)",
                 path, ", ".join(merged.names()), merged.default)
    return merged


# ==================== BATCH ====================

@dataclass
class BatchItem:
    text: str
    name: str
    font: Optional[str] = None
    shadow: Optional[str] = None
    color: Optional[str] = None
    gradient: bool = False
    on: Optional[str] = None
    off: Optional[str] = None


def safe_name(text: str) -> str:
    """Filename stem derived from banner text"""
    stem = "".join(ch if ch.isalnum() else "_" for ch in text.replace("\n", "_"))
    return stem[:30] or "banner"


def _optional_str(entry: Dict[str, Any], key: str, idx: int) -> Optional[str]:
    """String field of a batch entry; YAML numbers like 112233 become strings"""
    value = entry.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ConfigError(f"batch entry {idx}: '{key}' must be a string, got {value!r}")
    return str(value)


def _flag(entry: Dict[str, Any], key: str, idx: int) -> bool:
    value = entry.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"batch entry {idx}: '{key}' must be true or false, got {value!r}")
    return value


def _unique_name(stem: str, used: Set[str]) -> str:
    name, n = stem, 1
    while name in used:
        n += 1
        name = f"{stem}_{n}"
    used.add(name)
    return name


def parse_batch(data: Any) -> List[BatchItem]:
    if not isinstance(data, list):
        raise ConfigError("batch spec must be a list of banner entries")

    items = []
    used: Set[str] = set()
    for idx, entry in enumerate(data, 1):
        if not isinstance(entry, dict) or not entry.get("text"):
            raise ConfigError(f"batch entry {idx} needs a 'text'")
        text = str(entry["text"])
        stem = safe_name(_optional_str(entry, "name", idx) or text)
        items.append(BatchItem(
            text=text,
            name=_unique_name(stem, used),
            font=_optional_str(entry, "font", idx),
            shadow=_optional_str(entry, "shadow", idx),
            color=_optional_str(entry, "color", idx),
            gradient=_flag(entry, "gradient", idx),
            on=_optional_str(entry, "on", idx),
            off=_optional_str(entry, "off", idx),
        ))
    return items


def load_batch(path: str) -> List[BatchItem]:
    return parse_batch(read_document(path))


EXAMPLE_BATCH: List[Dict[str, Any]] = [
    {"text": "Hello", "shadow": "outline"},
    {"text": "Solid\nShadow", "shadow": "solid", "color": "m"},
    {"text": "Gradient", "color": "#38bdf8", "gradient": True, "name": "gradient"},
    {"text": "Plain", "on": "##", "off": ".."},
]

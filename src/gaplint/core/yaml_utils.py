from __future__ import annotations

from typing import Any

import yaml


def parse_yaml(text: str) -> Any:
    return yaml.safe_load(text)


def yaml_error_message(exc: yaml.YAMLError) -> str:
    return " ".join(str(exc).split())

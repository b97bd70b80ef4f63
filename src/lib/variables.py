"""
Variable substitution preprocessor

    ---
    variables:
      version: 2.1.0
      package:
        name: docdown
    ---
    Install {{ package.name }} {{ version }}.

    ```bash-vars
    pip install {{ package.name }}=={{ version }}
    ```

``{{ name }}`` is replaced in prose with the value from the ``variables``
mapping of the page context (site variables merged with front matter);
dotted names walk nested mappings. Unknown names are left as written.
Fenced code is left alone unless its language carries a ``-vars`` suffix,
which is removed.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from ..models.context import ProcessingContext
from .fences import fences_find
from .log import LOG

VARIABLE = re.compile(r"\{\{\s*([A-Za-z0-9_.]+)\s*\}\}")
VARS_SUFFIX = "-vars"


def variables_load(path: Path) -> Dict[str, Any]:
    """
    Read site variables from a YAML file.

    A file whose top level is not a mapping yields no variables.

    Raises:
        OSError: When the file cannot be read
        yaml.YAMLError: When the file is not valid YAML
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        LOG(f"Ignoring {path}: variables must be a mapping", level=1)
        return {}
    return data


def variable_resolve(name: str, variables: Mapping[str, Any]) -> Optional[Any]:
    """Value of a dotted name, None when any step is missing"""
    current: Any = variables
    for key in name.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return None
        current = current[key]
    return current


def variables_substitute(text: str, variables: Mapping[str, Any]) -> str:
    def variable_replace(match: re.Match[str]) -> str:
        value = variable_resolve(match.group(1), variables)
        return match.group(0) if value is None else str(value)

    return VARIABLE.sub(variable_replace, text)


def variables_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Substitute ``{{ name }}`` outside fences and inside ``-vars`` fences"""
    variables = context.config.get("variables")
    if not isinstance(variables, Mapping) or not variables or "{{" not in markdown:
        return markdown

    pieces: List[str] = []
    cursor = 0
    for fence in fences_find(markdown):
        pieces.append(variables_substitute(markdown[cursor:fence.start], variables))
        language = fence.language or ""
        text = markdown[fence.start:fence.end]
        if language.endswith(VARS_SUFFIX):
            opener = fence.marker + fence.info.replace(language, language[:-len(VARS_SUFFIX)], 1)
            text = opener + "\n" + variables_substitute(fence.body, variables) + fence.marker
        pieces.append(text)
        cursor = fence.end
    pieces.append(variables_substitute(markdown[cursor:], variables))
    return "".join(pieces)

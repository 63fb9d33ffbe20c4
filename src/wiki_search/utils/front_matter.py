"""YAML front matter utilities for wiki markdown pages.

Uses the conventional '---' delimiters to separate YAML front matter from
markdown content.

Example page with front matter:
    ---
    title: 红石限制说明
    category: 进阶指南
    last_updated: 2025-12-08
    tags: [redstone, rules]
    ---
    # 红石与生电限制

    作为生电友好服...
"""

import logging
import re
from typing import Any

import yaml


logger = logging.getLogger(__name__)

DELIMITER = "---"

_FRONT_MATTER_PATTERN = re.compile(
    rf"^{re.escape(DELIMITER)}[ \t]*\r?\n(.*?)\r?\n{re.escape(DELIMITER)}[ \t]*(?:\r?\n|$)",
    re.DOTALL,
)


def parse_front_matter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter from markdown content.

    Args:
        content: Full markdown content including front matter

    Returns:
        Tuple of (front_matter_dict, markdown_content)
        If no valid front matter is found, returns (empty dict, original content)

    Example:
        >>> metadata, markdown = parse_front_matter("---\\ntitle: 加入教程\\n---\\n# 如何加入")
        >>> metadata["title"]
        '加入教程'
        >>> markdown
        '# 如何加入'
    """
    match = _FRONT_MATTER_PATTERN.match(content)
    if not match:
        return {}, content

    try:
        metadata = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        logger.debug("Ignoring unparseable front matter: %s", exc)
        return {}, content

    if not isinstance(metadata, dict):
        return {}, content

    return metadata, content[match.end() :]

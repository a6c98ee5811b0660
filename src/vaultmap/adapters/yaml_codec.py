import io
import logging
import re
from typing import Any

import yaml

from ..core.ports import FrontmatterCodec

logger = logging.getLogger(__name__)

# Leading "---" block; the block itself may be empty ("---\n---\n")
_FM = re.compile(r"^\ufeff?---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|$)", re.DOTALL)


class YamlFrontmatter(FrontmatterCodec):
    def decode(self, text: str, source: str = "<string>") -> tuple[dict[str, Any], str]:
        """
        Return (frontmatter, body).

        A block that is not valid YAML, or not a mapping, decodes to an
        empty dict; the block is still stripped from the body.
        """
        m = _FM.match(text)
        if not m:
            return {}, text
        body = text[m.end() :]
        block = m.group(1) or ""
        try:
            fm = yaml.safe_load(io.StringIO(block))
        # Timestamp-shaped values that are not real dates (2024-02-30) raise ValueError
        except (yaml.YAMLError, ValueError) as e:
            logger.warning("Ignoring unparsable frontmatter in %s: %s", source, e)
            return {}, body
        if fm is None:
            return {}, body
        if not isinstance(fm, dict):
            logger.warning(
                "Ignoring frontmatter in %s: expected a mapping, got %s",
                source,
                type(fm).__name__,
            )
            return {}, body
        return {str(k): v for k, v in fm.items()}, body

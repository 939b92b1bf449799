"""Serialize image records into a bound attribute value.

The consumer reads the attribute with its own binding syntax, so the value
looks like an object literal with unquoted keys and single-quoted strings:

    [{id:0,src:'/images/a.jpg',alt:'A',caption:'',extraAttributes:{}}]

It is embedded in a double-quoted HTML attribute and must never contain a
bare double quote.
"""

import json
import re

APOSTROPHE_SUBSTITUTE = "ʼ"

# Keys directly follow "{" or ","; escaped quotes inside values never do.
_QUOTED_KEY = re.compile(r'(?<=[{,])"([^"\\]+)":')


def sanitize_text(text: str | None) -> str:
    """Replace apostrophes in free text with MODIFIER LETTER APOSTROPHE.

    Escaping a quote inside a value delimited by the same quote is not safely
    reversible for the consumer, so this substitution is lossy on purpose.
    """
    if not text:
        return ""
    return text.replace("'", APOSTROPHE_SUBSTITUTE)


def array_to_attr_string(records: list[dict]) -> str:
    """Convert a list of flat records into an attribute-safe literal string."""
    result = json.dumps(records, ensure_ascii=False, separators=(",", ":"))

    result = _QUOTED_KEY.sub(r"\1:", result)
    result = result.replace("'", "\\'")
    result = result.replace('"', "'")

    return result

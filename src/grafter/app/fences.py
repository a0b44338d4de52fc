import re

# A whole-output fenced block, e.g. "```python\n...\n```".
_FENCED_BLOCK = re.compile(r"\A\s*```[\w+.-]*[ \t]*\n(.*?)\n?```\s*\Z", re.DOTALL)


def strip_code_fences(text: str) -> str:
    match = _FENCED_BLOCK.match(text)
    if not match:
        return text
    return match.group(1) + "\n"

import re

SCOPE_CODE_RE = re.compile(r"^[A-Za-z0-9_-]{1,32}$")


def is_scope_code(value: str) -> bool:
    return bool(SCOPE_CODE_RE.fullmatch(value))

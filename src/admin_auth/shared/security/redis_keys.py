"""Redis 키 템플릿 유틸리티."""

PLACEHOLDER = "{}"


def format_key(pattern: str, *args: object) -> str:
    """키 템플릿의 `{}` 자리표시자를 왼쪽부터 인자로 치환한다.

    인자보다 자리표시자가 많으면 남는 자리표시자는 그대로 둔다.

    Example:
        >>> format_key("auth:user:access:{}", 42)
        'auth:user:access:42'
    """
    parts: list[str] = []
    rest = pattern
    for arg in args:
        head, sep, rest = rest.partition(PLACEHOLDER)
        parts.append(head)
        if not sep:
            break
        parts.append(str(arg))
    parts.append(rest)
    return "".join(parts)

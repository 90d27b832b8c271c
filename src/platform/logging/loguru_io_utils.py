from inspect import Signature, getfile, getsourcelines, signature
from os.path import basename
import re
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    MASK,
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


MAX_CONTENT_LENGTH = 500

# Matches `password='...'` / `password_hash="..."` style fragments inside reprs
_SENSITIVE_REPR_PATTERN = re.compile(
    r"(\w*(?:%s)\w*)(=)('[^']*'|\"[^\"]*\"|SecretStr\('[^']*'\))"
    % '|'.join(sorted(SENSITIVE_KEYWORDS)),
    re.IGNORECASE,
)


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    try:
        lineno = getsourcelines(func)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(getattr(func, "__func__", func)))}::{func.__qualname__}:{lineno}'


def reset_call_depth() -> None:
    layer = call_depth_var.get() - 1
    call_depth_var.set(layer)
    if not layer:
        chain_start_time_var.set(0)


def bind_arguments(
    sig: Signature | None, args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Name positional arguments so they can be masked by keyword"""
    if sig is None:
        return {'args': args, **kwargs}
    try:
        bound = sig.bind_partial(*args, **kwargs)
    except TypeError:
        return {'args': args, **kwargs}
    arguments = dict(bound.arguments)
    arguments.pop('self', None)
    arguments.pop('cls', None)
    return arguments


def safe_signature(func: Callable[..., Any]) -> Signature | None:
    try:
        return signature(func)
    except (TypeError, ValueError):
        return None


def is_sensitive_keyword(keyword: Any) -> bool:
    return isinstance(keyword, str) and any(
        word in keyword.lower() for word in SENSITIVE_KEYWORDS
    )


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return MASK if is_sensitive_keyword(keyword) else value


def mask_sensitive(data: Any) -> Any:
    try:
        data_str = str(data)
        new_data_str = _SENSITIVE_REPR_PATTERN.sub(rf"\1\2'{MASK}'", data_str)
        return data if data_str == new_data_str else new_data_str
    except Exception:
        return data


def truncate_content(data: Any) -> Any:
    data_str = str(data)
    if len(data_str) <= MAX_CONTENT_LENGTH:
        return data
    return f'{data_str[:MAX_CONTENT_LENGTH]}...(truncated {len(data_str) - MAX_CONTENT_LENGTH} chars)'

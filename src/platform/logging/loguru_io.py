"""
`Logger.io`: trace decorator for use cases, repositories and controllers

Logs the bound arguments on entry and the return value on exit (DEBUG only),
masking anything that looks like a credential. Exceptions are logged once, at
the innermost decorated frame, and always re-raised unless `reraise=False`.
"""

from collections.abc import Awaitable, Iterator
from contextlib import contextmanager
from functools import wraps
from inspect import Signature, iscoroutinefunction
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import (
    ExtraField,
    call_depth_var,
    custom_logger,
)
from src.platform.logging.loguru_io_utils import (
    bind_arguments,
    build_call_target_func_path,
    get_chain_start_time,
    mask_sensitive,
    reset_call_depth,
    safe_signature,
    should_mask_keyword,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])


class _Swallowed(Exception):
    """Raised inside the call scope when an exception was logged but not re-raised"""


class LoguruIO:
    def __init__(
        self, custom_logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = False
    ) -> None:
        self._custom_logger = custom_logger
        self.reraise = reraise
        self.truncate_content = truncate_content
        self.extra: dict[str, Any] = {}
        self.depth = 2  # log call -> wrapper -> caller
        self._signature: Signature | None = None

    def _log(self, *, scope_frames: int = 0) -> 'LoguruLogger':
        # Calls made from inside _call_scope sit behind two extra frames (contextlib + generator)
        return self._custom_logger.bind(**self.extra).opt(depth=self.depth + scope_frames)

    def log_arguments(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        call_depth_var.set(call_depth_var.get() + 1)
        self.extra[ExtraField.CHAIN_START_TIME] = get_chain_start_time()
        if settings.DEBUG:  # masking is not free; skip it when DEBUG lines are dropped anyway
            arguments = bind_arguments(self._signature, args, kwargs)
            self._log(scope_frames=2).debug(f'args: {self.mask_sensitive(arguments)}')

    def log_return(self, return_value: Any) -> None:
        if settings.DEBUG:
            self._log().debug(f'return: {self.mask_sensitive(return_value)}')

    def log_exception(self, e: Exception) -> None:
        # An exception bubbling through several decorated frames is logged once
        if getattr(e, '_has_logged', False):
            return
        e._has_logged = True  # type: ignore[attr-defined]
        if isinstance(e, CustomBaseError):
            self._log(scope_frames=2).error(f'{type(e).__name__}: {e}')
        else:
            self._log(scope_frames=2).exception(f'{type(e).__name__}: {e}')

    def mask_sensitive(self, data: Any) -> Any:
        if isinstance(data, dict):
            processed_data: Any = {
                key: self.mask_sensitive(should_mask_keyword(key, value))
                for key, value in data.items()
            }
        elif isinstance(data, list | tuple):
            processed_data = type(data)(self.mask_sensitive(item) for item in data)
        else:
            processed_data = mask_sensitive(data)

        return truncate_content(processed_data) if self.truncate_content else processed_data

    @contextmanager
    def _call_scope(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Iterator[None]:
        try:
            self.log_arguments(args, kwargs)
            yield
        except Exception as e:
            self.log_exception(e)
            if self.reraise:
                raise
            raise _Swallowed from e
        finally:
            reset_call_depth()

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._custom_logger.catch).__code__.co_filename
        )
        return func

    def __call__(self, func: _F) -> _F:
        self.extra[ExtraField.CALL_TARGET] = build_call_target_func_path(func)
        self._signature = safe_signature(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    with self._call_scope(args, kwargs):
                        return_value = await cast(Awaitable[Any], func(*args, **kwargs))
                        self.log_return(return_value)
                        return return_value
                except _Swallowed:
                    return None

            return cast(_F, self._hide_from_traceback(async_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                with self._call_scope(args, kwargs):
                    return_value = func(*args, **kwargs)
                    self.log_return(return_value)
                    return return_value
            except _Swallowed:
                return None

        return cast(_F, self._hide_from_traceback(sync_wrapper))


_P = ParamSpec('_P')
_T = TypeVar('_T')


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate_content: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate_content: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(
            custom_logger=custom_logger, reraise=reraise, truncate_content=truncate_content
        )
        return decorator(func) if func else decorator

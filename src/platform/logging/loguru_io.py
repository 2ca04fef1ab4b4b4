from collections.abc import Awaitable
from functools import wraps
from inspect import iscoroutinefunction
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload

from opentelemetry import trace


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
    build_call_target_func_path,
    get_chain_start_time,
    mask_sensitive,
    reset_call_depth,
    should_mask_keyword,
    truncate_content,
)

_F = TypeVar('_F', bound=Callable[..., Any])


def current_trace_id() -> str:
    """Hex trace id of the active span, '' outside a trace."""
    span_context = trace.get_current_span().get_span_context()
    return format(span_context.trace_id, '032x') if span_context.is_valid else ''


class LoguruIO:
    """
    Decorator that logs a call's arguments, return value and exception.

    Arguments and return values are only rendered under DEBUG. Exceptions are
    always logged once per call chain: CustomBaseError subclasses (expected
    outcomes such as an overbooked range) without a traceback, anything else
    with one. Every line carries the active OpenTelemetry trace id so it can
    be matched to the reservation span.
    """

    def __init__(
        self, custom_logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = False
    ) -> None:
        self._custom_logger = custom_logger
        self.reraise = reraise
        self.truncate_content = truncate_content
        self.extra: dict[str, Any] = {}
        self.depth = 2  # wrapper + helper frames

    def _bound(self, *, depth: int) -> 'LoguruLogger':
        return self._custom_logger.bind(
            **self.extra, **{ExtraField.TRACE_ID: current_trace_id()}
        ).opt(depth=depth)

    def enter(self, *args: Any, **kwargs: Any) -> None:
        call_depth_var.set(call_depth_var.get() + 1)
        self.extra[ExtraField.CHAIN_START_TIME] = get_chain_start_time()
        if settings.DEBUG:
            self._bound(depth=self.depth).debug(
                f'args: {self.mask_sensitive(args)}, kwargs: {self.mask_sensitive(kwargs)}'
            )

    def leave(self, return_value: Any) -> Any:
        if settings.DEBUG:
            self._bound(depth=self.depth).debug(f'return: {self.mask_sensitive(return_value)}')
        return return_value

    def fail(self, e: Exception) -> None:
        self.log_exception(e)
        if self.reraise:
            raise e

    def log_exception(self, e: Exception) -> None:
        # Already logged further down the call chain
        if getattr(e, '_has_logged', False):
            return
        try:
            e._has_logged = True  # type: ignore[attr-defined]
        except AttributeError:
            pass

        bound = self._bound(depth=self.depth + 1)
        if isinstance(e, CustomBaseError):
            bound.error(f'{type(e).__name__}: {e}')
        else:
            bound.exception(f'{type(e).__name__}: {e}')

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._custom_logger.catch).__code__.co_filename
        )
        return func

    def mask_sensitive(self, data: Any) -> Any:
        if isinstance(data, dict):
            masked: Any = {
                key: self.mask_sensitive(should_mask_keyword(key, value))
                for key, value in data.items()
            }
        elif isinstance(data, list | tuple):
            masked = type(data)(self.mask_sensitive(item) for item in data)
        else:
            masked = mask_sensitive(data)

        return truncate_content(masked) if self.truncate_content else masked

    def __call__(self, func: _F) -> _F:
        self.extra[ExtraField.CALL_TARGET] = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                self.enter(*args, **kwargs)
                try:
                    return self.leave(await cast(Awaitable[Any], func(*args, **kwargs)))
                except Exception as e:
                    self.fail(e)
                    return None
                finally:
                    reset_call_depth()

            return cast(_F, self._hide_from_traceback(async_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            self.enter(*args, **kwargs)
            try:
                return self.leave(func(*args, **kwargs))
            except Exception as e:
                self.fail(e)
                return None
            finally:
                reset_call_depth()

        return cast(_F, self._hide_from_traceback(sync_wrapper))


_P = ParamSpec('_P')
_T = TypeVar('_T')


class Logger:
    """
    Usage:
        Logger.base.info('🎬 [RESERVE] ...')

        @Logger.io
        async def lock_range(self, *, start_at: int, end_at: int): ...

        @Logger.io(truncate_content=False)
        def bulk_load(...): ...
    """

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

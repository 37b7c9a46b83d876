"""Unified logger providing technical instrumentation on top of Logfire."""

from __future__ import annotations

import hashlib
from contextlib import contextmanager
from threading import Lock
from typing import Any, Optional, Set, Tuple

import logfire
from sitepartials.settings import get_logging_settings, refresh_logging_settings_cache


_logfire_config_state: Optional[Tuple[bool, bool, Optional[str]]] = None
_logfire_config_lock = Lock()


def _token_fingerprint(token: Optional[str]) -> Optional[str]:
    """Create a stable fingerprint for secret comparison without storing raw values."""
    if not token:
        return None
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def refresh_logfire_configuration(force: bool = False) -> None:
    """
    Reconfigure the global Logfire client from the current logging settings.

    Reads ``SITEPARTIALS_LOGFIRE`` (export spans when a token is present),
    ``SITEPARTIALS_LOG_CONSOLE`` (mirror records to the console) and
    ``LOGFIRE_TOKEN``.

    Args:
        force: When True, always reapply configuration even if nothing changed.
    """
    global _logfire_config_state

    if force:
        refresh_logging_settings_cache()
    settings = get_logging_settings()
    enabled = settings.logfire_enabled
    console = settings.log_console
    fingerprint = _token_fingerprint(settings.logfire_token)
    desired_state = (enabled, console, fingerprint)

    with _logfire_config_lock:
        if not force and _logfire_config_state == desired_state:
            return

        send_option: str | bool = "if-token-present" if enabled else False

        logfire.configure(
            send_to_logfire=send_option,
            console=None if console else False,
            scrubbing=False,
        )

        _logfire_config_state = desired_state


# Initialize configuration eagerly so early logging honors current settings.
refresh_logfire_configuration(force=True)


class UnifiedLogger:
    """Tagged logger for a module or component, backed by Logfire."""

    def __init__(self, tag: str):
        """
        Args:
            tag: Module or component identifier
        """
        self.tag = tag
        self._logfire_instance = None  # Lazy initialization

    @property
    def _logfire(self):
        """Lazy-loaded Logfire instance."""
        if self._logfire_instance is None:
            refresh_logfire_configuration()
            self._logfire_instance = logfire.with_tags(self.tag)
        return self._logfire_instance

    def info(self, message: str, **extra: Any) -> None:
        """Technical info logging."""
        self._logfire.info(message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Technical warning logging."""
        self._logfire.warn(message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Technical error logging."""
        self._logfire.error(message, **extra)

    def debug(self, message: str, **extra: Any) -> None:
        """Technical debug logging."""
        self._logfire.debug(message, **extra)

    @contextmanager
    def span(self, operation: str, **span_data: Any):
        """
        Manual instrumentation span for critical code paths.

        Usage:
            with logger.span("include", reference="nav.html"):
                # critical operation
                pass
        """
        with self._logfire.span(f"{self.tag}:{operation}", **span_data):
            yield

    def trace(self, func_name_template: Optional[str] = None):
        """
        Decorator for function instrumentation with sensible defaults.

        Args:
            func_name_template: Optional span name (defaults to ``tag:function``)

        Usage:
            @logger.trace()
            def locate(reference: str, roots: list): pass
        """
        def decorator(func):
            span_name = func_name_template or f"{self.tag}:{func.__name__}"
            return self._logfire.instrument(
                span_name,
                extract_args=True,
                record_return=True
            )(func)
        return decorator


class OneTimeNotice:
    """Log a warning at most once per key for the lifetime of this instance.

    Renderers own one of these and pass it to the directive executor so that
    "shown once" state is explicit and never shared between unrelated hosts.
    """

    def __init__(self, logger: Optional[UnifiedLogger] = None):
        self._logger = logger or UnifiedLogger(tag="notice")
        self._shown: Set[str] = set()
        self._lock = Lock()

    def warn(self, key: str, message: str, **extra: Any) -> bool:
        """Emit *message* if *key* has not been announced yet.

        Returns:
            True if the warning was emitted by this call
        """
        with self._lock:
            if key in self._shown:
                return False
            self._shown.add(key)
        self._logger.warning("{notice}: {detail}", notice=key, detail=message, **extra)
        return True

    def has_shown(self, key: str) -> bool:
        return key in self._shown

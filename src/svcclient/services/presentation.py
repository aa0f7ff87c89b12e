"""Error presentation policy.

:class:`ErrorPresenter` decides whether a failed call is shown to the user
and how. Rendering itself goes through the ``notify_error``, ``alert_dialog``
and ``iframe_dialog`` hooks.

Also hosts the two process-level handlers: :func:`runtime_error_handler`
(``sys.excepthook`` shape) and :func:`unhandled_rejection_handler` (asyncio
loop exception handler shape).
"""

from __future__ import annotations

import asyncio
import logging
import traceback
from types import TracebackType
from typing import TYPE_CHECKING, Any

from svcclient.domain.urls import is_development_mode
from svcclient.errors import ORIGIN, FailureKind

if TYPE_CHECKING:
    from svcclient.domain.envelope import RequestErrorInfo, ServiceError, ServiceResponse
    from svcclient.domain.options import ErrorMode, ServiceCallOptions
    from svcclient.domain.page import BrowsingContext
    from svcclient.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

NOT_LOGGED_IN = "NotLoggedIn"
UNKNOWN_ERROR = "??ERROR??"
CONNECTION_ERROR = "An unknown connection error occurred! Check the log for details."
CONNECTION_REFUSED = "HTTP 500: Connection refused! Check the log for details."
HTTP_ERROR = "HTTP {status} error! Check the log for details."
ABORT_STATUS_TEXT = "abort"
RUNTIME_ERROR_TITLE = "UNHANDLED ERROR! See the log for details."


class ErrorPresenter:
    """Routes failures to the user, honoring override hooks first."""

    def __init__(self, plugin_manager: PluginManager) -> None:
        self._pm = plugin_manager

    def handle_error(
        self,
        response: ServiceResponse | None,
        error_info: RequestErrorInfo,
        options: ServiceCallOptions | None = None,
    ) -> bool:
        """Present a failed call. Returns True if anything consumed it.

        Order: not-logged-in hook, caller ``on_error``, structured error.
        A failure with no structured error that nobody intercepts is left
        alone and False is returned.
        """
        error = response.error if response is not None else None

        if (
            error is not None
            and error.code == NOT_LOGGED_IN
            and self._pm.has_impl("handle_not_logged_in")
            and self._pm.hook.handle_not_logged_in(options=options, response=response)
        ):
            logger.debug("NotLoggedIn handled by host hook")
            return True

        if options is not None and options.on_error is not None:
            if options.on_error(response, error_info):
                logger.debug("Failure handled by caller on_error")
                return True

        if error is not None:
            mode = options.error_mode if options is not None else "alert"
            self.show_service_error(error, error_info, mode)
            return True

        return False

    def show_service_error(
        self,
        error: ServiceError | None,
        error_info: RequestErrorInfo | None = None,
        mode: ErrorMode = "alert",
    ) -> None:
        """Show a structured error, or describe a transport-level failure."""
        if error is not None or error_info is None:
            message = None
            if error is not None:
                message = error.message if error.message is not None else error.code
            self._show(message if message is not None else UNKNOWN_ERROR, mode)
            return

        if not error_info.response_text:
            if not error_info.status:
                if error_info.status_text != ABORT_STATUS_TEXT:
                    self._show(CONNECTION_ERROR, mode)
            elif error_info.status == 500:
                self._show(CONNECTION_REFUSED, mode)
            else:
                self._show(HTTP_ERROR.format(status=error_info.status), mode)
        elif mode == "notification":
            self._pm.hook.notify_error(message=error_info.response_text, title=None, options={})
        else:
            self._pm.hook.iframe_dialog(html=error_info.response_text)

    def _show(self, message: str, mode: ErrorMode) -> None:
        if mode == "notification":
            self._pm.hook.notify_error(message=message, title=None, options={})
        else:
            self._pm.hook.alert_dialog(message=message)


# ── Process-level handlers ───────────────────────────────────────────


def runtime_error_handler(
    exc_type: type[BaseException],
    exc: BaseException,
    tb: TracebackType | None,
    *,
    plugin_manager: PluginManager,
    page: BrowsingContext,
) -> None:
    """Notify about an uncaught exception, in development mode only.

    Bind *plugin_manager* and *page* with :func:`functools.partial` before
    installing as ``sys.excepthook``. Never raises.
    """
    try:
        if not is_development_mode(page.hostname):
            return
        frames = traceback.extract_tb(tb)
        where = f"{frames[-1].filename}, Line: {frames[-1].lineno}" if frames else "<unknown>"
        detail = "".join(traceback.format_exception(exc_type, exc, tb)).rstrip()
        message = f"Message: {exc}\nFile: {where}\n{detail}"
        plugin_manager.hook.notify_error(
            message=message,
            title=RUNTIME_ERROR_TITLE,
            options={"escape_html": False, "timeout": 15000},
        )
    except Exception:
        logger.debug("runtime_error_handler failed", exc_info=True)


def unhandled_rejection_handler(
    loop: asyncio.AbstractEventLoop,
    context: dict[str, Any],
) -> None:
    """Swallow never-retrieved service call failures.

    Failures raised by this client were already presented (or are silent by
    nature), so they are not re-reported. Non-silent, non-cancelled ones are
    still logged. Everything else goes to the loop's default handler.
    """
    exc = context.get("exception")
    if getattr(exc, "origin", None) != ORIGIN:
        loop.default_exception_handler(context)
        return
    if not getattr(exc, "silent", False) and getattr(exc, "kind", None) != FailureKind.CANCELLED:
        logger.error("Unhandled service call failure: %s", exc, exc_info=exc)


def install_rejection_handler(loop: asyncio.AbstractEventLoop | None = None) -> None:
    """Install :func:`unhandled_rejection_handler` on *loop* (default: running loop)."""
    (loop or asyncio.get_running_loop()).set_exception_handler(unhandled_rejection_handler)

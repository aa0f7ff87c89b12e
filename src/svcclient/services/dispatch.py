"""Redirect/error dispatch for calls that reached the server but failed.

Order of evaluation for a failed HTTP status:

1. 403 + redirect-follow + ``Location`` header: navigate, show nothing.
2. JSON content type with a structured ``Error``: route the envelope through
   :meth:`ErrorPresenter.handle_error` with the original status as context.
3. Anything else: a status-only failure. Callers still get ``on_error``; if
   nothing intercepts it, the failure is described by status.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from svcclient.domain.envelope import RequestErrorInfo, parse_envelope

if TYPE_CHECKING:
    import httpx

    from svcclient.domain.options import ServiceCallOptions
    from svcclient.domain.page import BrowsingContext
    from svcclient.plugins.manager import PluginManager
    from svcclient.services.presentation import ErrorPresenter

logger = logging.getLogger(__name__)


class FailureDispatcher:
    """Classifies failed HTTP responses and follows auth redirects."""

    def __init__(
        self,
        presenter: ErrorPresenter,
        page: BrowsingContext,
        plugin_manager: PluginManager,
    ) -> None:
        self._presenter = presenter
        self._page = page
        self._pm = plugin_manager

    def dispatch(self, response: httpx.Response, options: ServiceCallOptions) -> bool:
        """Handle a failed *response*. Returns True if a redirect was followed."""
        if response.status_code == 403 and options.allow_redirect:
            location = response.headers.get("Location")
            if location:
                self.follow_redirect(location)
                return True

        info = RequestErrorInfo(status=response.status_code, status_text=response.reason_phrase)

        content_type = response.headers.get("content-type", "").lower()
        if "json" in content_type:
            envelope = parse_envelope(response.content, options.response_model)
            if envelope is not None and envelope.error is not None:
                self._presenter.handle_error(envelope, info, options)
                return False

        self.report_status_failure(
            RequestErrorInfo(
                status=info.status,
                status_text=info.status_text,
                response_text=response.text or None,
            ),
            options,
        )
        return False

    def report_status_failure(self, info: RequestErrorInfo, options: ServiceCallOptions) -> None:
        """Present a failure that carries no structured error."""
        logger.debug("Status-only failure: %s %s", info.status, info.status_text)
        if not self._presenter.handle_error(None, info, options):
            self._presenter.show_service_error(None, info, options.error_mode)

    def follow_redirect(self, location: str) -> None:
        logger.info("Following redirect to %s", location)
        self._page.navigate(location)
        self._pm.hook.navigate(location=location)

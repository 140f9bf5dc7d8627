"""
HTTP dispatch of fault experiments to an in-process golang agent.

Each call to Dispatcher.dispatch() issues at most one POST and always returns
an InjectionResult; failures are classified, never raised.

Usage:
    from faultbridge import Dispatcher, ExperimentDescription, Intent

    description = ExperimentDescription(
        action="modify",
        flags={"func": "main.(*Business).Execute", "value": "Hanmeimei"},
    )
    result = Dispatcher().dispatch(description, Intent.INJECT)
    if result.ok:
        print(result.response.success)
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Type

import httpx
from pydantic import BaseModel, ValidationError

from faultbridge.config import Settings, get_settings
from faultbridge.exceptions import (
    AgentTransportError,
    FaultBridgeError,
    MissingParameterError,
    PayloadBuildError,
    ResultDecodeError,
)
from faultbridge.flags import FUNC, HOST, PORT
from faultbridge.models import (
    AgentResponse,
    ExperimentDescription,
    InjectionResult,
    Intent,
)
from faultbridge.payload import build_request_body

logger = logging.getLogger(__name__)


class Dispatcher:
    """Executor for golang experiments.

    Stateless between calls. When no client is injected, a short-lived
    httpx.Client is opened per dispatch. An injected client is shared across
    calls and stays owned by the caller.
    """

    name = "golang"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        client: Optional[httpx.Client] = None,
        response_model: Type[BaseModel] = AgentResponse,
    ) -> None:
        self.settings = settings or get_settings()
        self.response_model = response_model
        self._client = client

    def build_url(self, description: ExperimentDescription, intent: Intent) -> str:
        host = description.flags.get(HOST.name) or self.settings.host
        port = description.flags.get(PORT.name) or self.settings.port
        if intent == Intent.RECOVER:
            path = self.settings.recover_path
        else:
            path = self.settings.inject_path
        return f"http://{host}:{port}{path}"

    def dispatch(
        self,
        description: ExperimentDescription,
        intent: Intent,
        *,
        timeout: Optional[float] = None,
    ) -> InjectionResult:
        """Send one experiment to the agent and classify the answer.

        Args:
            description: Experiment to inject or recover.
            intent: INJECT or RECOVER; selects the agent route.
            timeout: Deadline in seconds for the HTTP call. Defaults to
                Settings.timeout.
        """
        url = self.build_url(description, intent)
        logger.debug(
            "dispatch uid=%s action=%s intent=%s url=%s",
            description.uid,
            description.action,
            intent.value,
            url,
        )
        try:
            if intent == Intent.INJECT and not description.flags.get(FUNC.name):
                raise MissingParameterError(FUNC.name)
            response = self._execute(description, url, timeout)
        except FaultBridgeError as exc:
            return InjectionResult.from_error(exc)
        return InjectionResult.delivered(response, url=url)

    def _execute(
        self,
        description: ExperimentDescription,
        url: str,
        timeout: Optional[float],
    ) -> BaseModel:
        try:
            body = build_request_body(description)
        except PayloadBuildError as exc:
            exc.url = url
            exc.details["url"] = url
            logger.warning("build request body failed, %s", exc.message)
            raise

        status_code, text = self._post(url, body, timeout)
        if status_code != 200:
            logger.error("%s: http request failed, %s", url, text)
            raise AgentTransportError(
                f"`{url}`: http request failed, status {status_code}",
                url=url,
                status_code=status_code,
                body=text,
            )
        return self._decode(url, text)

    def _post(
        self, url: str, body: bytes, timeout: Optional[float]
    ) -> tuple[int, str]:
        seconds = self.settings.timeout if timeout is None else timeout
        # httpx timeouts are per step; deadline bounds the whole call.
        deadline = time.monotonic() + seconds
        try:
            if self._client is not None:
                return self._send(self._client, url, body, seconds, deadline)
            with httpx.Client(timeout=seconds) as client:
                return self._send(client, url, body, seconds, deadline)
        except httpx.TimeoutException as exc:
            logger.warning("post request body failed, %s", exc)
            raise AgentTransportError(
                f"`{url}`: http request timed out after {seconds}s",
                url=url,
                timed_out=True,
                cause=exc,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("post request body failed, %s", exc)
            raise AgentTransportError(
                f"`{url}`: http request failed, {exc}",
                url=url,
                cause=exc,
            ) from exc

    def _send(
        self,
        client: httpx.Client,
        url: str,
        body: bytes,
        seconds: float,
        deadline: float,
    ) -> tuple[int, str]:
        headers = {"Content-Type": "application/json"}
        with client.stream(
            "POST", url, content=body, headers=headers, timeout=seconds
        ) as response:
            chunks = []
            self._check_deadline(url, seconds, deadline)
            for chunk in response.iter_bytes():
                chunks.append(chunk)
                self._check_deadline(url, seconds, deadline)
            content = b"".join(chunks)
            text = content.decode(response.encoding or "utf-8", errors="replace")
            return response.status_code, text

    @staticmethod
    def _check_deadline(url: str, seconds: float, deadline: float) -> None:
        if time.monotonic() > deadline:
            logger.warning("post request body failed, deadline of %ss expired", seconds)
            raise AgentTransportError(
                f"`{url}`: http request timed out after {seconds}s",
                url=url,
                timed_out=True,
            )

    def _decode(self, url: str, text: str) -> BaseModel:
        try:
            return self.response_model.model_validate_json(text)
        except ValidationError as exc:
            logger.error("`%s`: unmarshal result failed, %s", text, exc)
            raise ResultDecodeError(
                "unmarshal result failed",
                body=text,
                url=url,
                cause=exc,
            ) from exc


def dispatch(
    description: ExperimentDescription,
    intent: Intent,
    *,
    timeout: Optional[float] = None,
    settings: Optional[Settings] = None,
) -> InjectionResult:
    """Dispatch a single experiment with a one-off Dispatcher."""
    return Dispatcher(settings).dispatch(description, intent, timeout=timeout)

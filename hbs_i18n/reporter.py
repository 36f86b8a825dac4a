"""Delivery of collected missing translations to Localeapp."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

import requests

from .collector import MissingTranslations
from .config import DEFAULT_API_BASE, DEFAULT_TIMEOUT, Config
from .errors import ConfigurationError, TransportError

SENDING_MESSAGE = "sending missing translations to localeapp"


@dataclass(frozen=True, slots=True)
class ReportOutcome:
    """Status and body returned by the report endpoint."""

    status_code: int
    body: str


class LocaleappClient:
    """Thin wrapper around the Localeapp missing-translations endpoint."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if not api_key:
            msg = (
                "Localeapp API key is required. Configure LOCALEAPP_API_KEY in the "
                "environment or api_key in the configuration file."
            )
            raise ConfigurationError(msg)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {"Content-Type": "application/json", "Accept": "application/json"}
        )

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise TransportError(f"Localeapp rejected {method} {endpoint}: {exc}", status) from exc
        except requests.RequestException as exc:
            raise TransportError(f"Could not reach Localeapp at {url}: {exc}") from exc
        return response

    def post_missing_translations(self, payload: Mapping[str, Any]) -> ReportOutcome:
        """POST ``payload`` as JSON to the project's missing-translations endpoint."""

        response = self._request(
            "POST",
            f"/v1/projects/{self.api_key}/translations/missing.json",
            data=json.dumps(payload),
        )
        return ReportOutcome(status_code=response.status_code, body=response.text)


def build_payload(collector: MissingTranslations) -> dict[str, Any]:
    return {"translations": collector.to_send()}


def send_missing_translations(
    config: Config,
    collector: MissingTranslations,
    client: LocaleappClient | None = None,
) -> ReportOutcome | None:
    """Send the collected keys when the configured locale has any.

    Returns ``None`` without contacting Localeapp when nothing is missing for
    ``config.default_locale``. Transport failures propagate as
    :class:`~hbs_i18n.errors.TransportError`; the call is never retried.
    """

    config.ensure_configured()
    if collector.is_empty(config.default_locale):
        return None
    if client is None:
        client = LocaleappClient(config.api_key, config.api_base, config.timeout)
    print(SENDING_MESSAGE, file=config.sink)
    return client.post_missing_translations(build_payload(collector))


__all__ = [
    "LocaleappClient",
    "ReportOutcome",
    "SENDING_MESSAGE",
    "build_payload",
    "send_missing_translations",
]

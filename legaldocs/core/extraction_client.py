import asyncio
from typing import Any, Dict, Optional

import httpx

from legaldocs.core.exceptions import APIClientError, APITimeoutError, ExtractionRejectedError
from legaldocs.utils.logging import get_logger

LOGGER = get_logger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class ExtractionAPIClient:
    """Client for the remote document extraction endpoint.

    The endpoint answers with an envelope of the form
    ``{"success": bool, "extraction": ..., "error": ..., "extractionModel": ...}``.
    Transport failures, timeouts and retryable status codes are retried with
    exponential backoff. An envelope reporting ``success: false`` is a final
    answer from the service and is raised as ExtractionRejectedError without
    another attempt.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str,
        timeout: int = 60,
        max_retries: int = 3,
        retry_delay: int = 2,
    ):
        """Initialize the client.

        Args:
            api_key: Bearer token for the extraction service (may be empty)
            api_url: Full URL of the extract endpoint
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts
            retry_delay: Base delay for exponential backoff
        """
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.logger = LOGGER

    @property
    def headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def submit(self, payload: Dict[str, Any], upload_id: Optional[str] = None) -> Dict[str, Any]:
        """Post a document payload and return the successful envelope.

        Raises:
            ExtractionRejectedError: If the service answers ``success: false``
            APITimeoutError: If every attempt times out
            APIClientError: On a final HTTP error or an unreadable envelope
        """
        log_extra = {"url": self.api_url, "upload_id": upload_id}
        self.logger.debug("Submitting document for extraction", extra={**log_extra, "timeout": self.timeout})

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for attempt in range(self.max_retries):
                try:
                    response = await client.post(self.api_url, headers=self.headers, json=payload)
                    response.raise_for_status()
                    envelope = response.json()
                except httpx.HTTPStatusError as e:
                    status_code = e.response.status_code
                    if status_code not in RETRYABLE_STATUS_CODES and status_code < 500:
                        raise APIClientError(
                            f"Extraction service rejected the request ({status_code}): {self._body(e.response)}",
                            original_error=e,
                        ) from e
                    await self._retry_or_raise(
                        e, attempt, log_extra, f"Extraction service error {status_code}", {"status_code": status_code}
                    )
                    continue
                except httpx.TimeoutException as e:
                    await self._retry_or_raise(e, attempt, log_extra, "Extraction service timed out")
                    continue
                except (httpx.HTTPError, ValueError) as e:
                    await self._retry_or_raise(e, attempt, log_extra, f"Extraction service unreachable: {e}")
                    continue

                return self._unwrap(envelope)

        raise APIClientError(f"Extraction service failed after {self.max_retries} attempts")

    def _unwrap(self, envelope: Any) -> Dict[str, Any]:
        if not isinstance(envelope, dict):
            raise APIClientError("Extraction service returned a non-object response")
        if envelope.get("success") is False:
            reason = envelope.get("error") or "Extraction service returned no record"
            self.logger.warning("Extraction service reported failure", extra={"url": self.api_url, "reason": reason})
            raise ExtractionRejectedError(reason)
        return envelope

    async def _retry_or_raise(
        self,
        error: Exception,
        attempt: int,
        log_extra: Dict[str, Any],
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.logger.warning(
            f"{message} (attempt {attempt + 1}/{self.max_retries})",
            extra={**log_extra, **(details or {})},
        )
        if attempt < self.max_retries - 1:
            await asyncio.sleep(self.retry_delay * (2 ** attempt))
            return

        if isinstance(error, httpx.TimeoutException):
            raise APITimeoutError(
                f"Extraction service timed out after {self.max_retries} attempts", original_error=error
            ) from error
        raise APIClientError(f"{message} after {self.max_retries} attempts", original_error=error) from error

    @staticmethod
    def _body(response: httpx.Response) -> str:
        try:
            return response.text[:500]
        except (httpx.ResponseNotRead, UnicodeDecodeError):
            return "<unreadable body>"

"""
Reservations API - Async client for the reservations and tables backend.

Every operation sends one JSON request, unwraps the backend's
``{"data": ...}`` / ``{"error": ...}`` envelope and returns the data. Callers
can abort a request in flight by setting an ``asyncio.Event`` passed as
``signal``; the operation then returns its fallback value instead of raising.
"""
import asyncio
import time
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import BaseModel

from ..config import Settings, get_settings
from ..error_handling.exceptions import (
    APIError,
    APIStatusError,
    RecordIdentifierError,
    RequestAborted,
)
from ..error_handling.logging_config import log_api_call
from ..models.schemas import ReservationStatus
from .formatting import format_reservation_date, format_reservation_time


Record = Union[Mapping[str, Any], BaseModel]

JSON_HEADERS = MappingProxyType({"Content-Type": "application/json"})

_NO_BODY = object()


def _as_record(record: Record) -> Dict[str, Any]:
    """Convert a mapping or pydantic model into a JSON-ready dict."""
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json", exclude_none=True)
    if isinstance(record, Mapping):
        return dict(record)
    raise TypeError(f"Expected a mapping or pydantic model, got {type(record).__name__}")


def _require_id(record: Record, record_type: str, field: str) -> Any:
    """Return the identifier stored in ``field`` or raise if it is missing."""
    value = _as_record(record).get(field)
    if value is None:
        raise RecordIdentifierError(record_type, field, f"missing {field}")
    return value


def _reject_id(record: Dict[str, Any], record_type: str, field: str) -> None:
    if record.get(field) is not None:
        raise RecordIdentifierError(
            record_type,
            field,
            f"new {record_type}s must not have a {field}",
            value=record[field]
        )


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(item) for item in value)
    return str(value)


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


class ReservationsAPI:
    """
    Client for the reservations backend.

    One instance wraps one ``httpx.AsyncClient``; use it as an async context
    manager or call ``aclose()`` when done. The instance keeps no record
    state between calls.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the client.

        Args:
            settings: Client settings (defaults to the process-wide settings)
            transport: Optional httpx transport, mainly for tests
        """
        self.settings = settings or get_settings()
        self._client = httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            headers=JSON_HEADERS,
            timeout=httpx.Timeout(self.settings.api_timeout),
            transport=transport,
        )
        logger.debug(f"ReservationsAPI initialized for {self.settings.api_base_url}")

    async def __aenter__(self) -> "ReservationsAPI":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Request execution
    # ------------------------------------------------------------------

    async def _send(
        self,
        request: httpx.Request,
        signal: Optional[asyncio.Event]
    ) -> httpx.Response:
        """
        Send a request, racing it against the caller's abort signal.

        Raises:
            RequestAborted: If the signal is set before the response arrives
        """
        if signal is None:
            return await self._client.send(request)

        if signal.is_set():
            raise RequestAborted(str(request.url))

        send_task = asyncio.ensure_future(self._client.send(request))
        abort_task = asyncio.ensure_future(signal.wait())

        try:
            done, _ = await asyncio.wait(
                {send_task, abort_task},
                return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            send_task.cancel()
            abort_task.cancel()
            raise

        abort_task.cancel()

        # A response that arrived together with the abort still wins
        if send_task in done:
            return send_task.result()

        send_task.cancel()
        await asyncio.wait({send_task})
        raise RequestAborted(str(request.url))

    async def _fetch_json(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        data: Any = _NO_BODY,
        signal: Optional[asyncio.Event] = None,
        on_cancel: Any = None
    ) -> Any:
        """
        Execute a request and unwrap the response envelope.

        Args:
            operation: Operation name for logging
            method: HTTP method
            path: Path relative to the base URL
            params: Query parameters
            data: Payload to send as ``{"data": data}``; omitted when not given
            signal: Optional abort signal owned by the caller
            on_cancel: Value returned when the request is aborted

        Returns:
            The ``data`` field of the response, None for 204 responses, or
            ``on_cancel`` when aborted

        Raises:
            APIError: If the response payload carries an ``error`` field
            APIStatusError: In strict mode, for non-2xx responses without one
            httpx.HTTPError: On transport failures (re-raised unchanged)
            ValueError: If the response body is not valid JSON
        """
        body = {} if data is _NO_BODY else {"json": {"data": data}}
        request = self._client.build_request(method, path, params=params, **body)
        url = str(request.url)
        start_time = time.time()

        try:
            response = await self._send(request, signal)

            if response.status_code == 204:
                log_api_call(
                    operation, method, url, True, time.time() - start_time,
                    {"status_code": 204}
                )
                return None

            payload = response.json()

        except RequestAborted:
            logger.debug(f"{operation} aborted by caller: {method} {url}")
            return on_cancel
        except Exception as e:
            log_api_call(
                operation, method, url, False, time.time() - start_time,
                {"error": type(e).__name__}
            )
            logger.exception(f"{operation} request failed: {e}")
            raise

        duration = time.time() - start_time
        status_code = response.status_code

        if isinstance(payload, dict) and payload.get("error"):
            log_api_call(
                operation, method, url, False, duration,
                {"status_code": status_code, "error": payload["error"]}
            )
            raise APIError(payload["error"], status_code=status_code, url=url)

        if not response.is_success:
            if self.settings.strict_status:
                log_api_call(
                    operation, method, url, False, duration,
                    {"status_code": status_code}
                )
                raise APIStatusError(status_code, url=url)
            logger.warning(
                f"{operation} got HTTP {status_code} without an error field; "
                f"returning response data"
            )

        log_api_call(
            operation, method, url, True, duration,
            {"status_code": status_code}
        )

        if not isinstance(payload, dict):
            return None
        return payload.get("data")

    def _check_created(self, created: Any, record_type: str, field: str) -> Any:
        if isinstance(created, dict) and created and created.get(field) is None:
            logger.warning(f"Created {record_type} came back without a {field}")
        return created

    # ------------------------------------------------------------------
    # Reservations
    # ------------------------------------------------------------------

    async def list_reservations(
        self,
        params: Optional[Mapping[str, Any]] = None,
        signal: Optional[asyncio.Event] = None
    ) -> Optional[List[Dict[str, Any]]]:
        """
        Retrieve reservations matching the given query parameters.

        Args:
            params: Query parameters passed through to the backend
                (e.g., {"date": "2023-01-01"}); None values are left out
            signal: Optional abort signal

        Returns:
            Possibly empty list of reservations with ``reservation_date``
            and ``reservation_time`` trimmed for display
        """
        query = {
            key: _query_value(value)
            for key, value in (params or {}).items()
            if value is not None
        }
        reservations = await self._fetch_json(
            "list_reservations", "GET", "/reservations",
            params=query, signal=signal, on_cancel=[]
        )
        return format_reservation_time(format_reservation_date(reservations))

    async def search_by_phone(
        self,
        mobile_number: str,
        signal: Optional[asyncio.Event] = None
    ) -> Optional[List[Dict[str, Any]]]:
        """
        Retrieve reservations matching a phone number.

        Args:
            mobile_number: Full or partial phone number to match
            signal: Optional abort signal

        Returns:
            Possibly empty list of matching reservations
        """
        return await self._fetch_json(
            "search_by_phone", "GET", "/reservations",
            params={"mobile_number": str(mobile_number)},
            signal=signal, on_cancel=[]
        )

    async def create_reservation(
        self,
        reservation: Record,
        signal: Optional[asyncio.Event] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Save a new reservation.

        Args:
            reservation: Reservation to save; must not have a ``reservation_id``
            signal: Optional abort signal

        Returns:
            The saved reservation, which now has a ``reservation_id``

        Raises:
            RecordIdentifierError: If the reservation already has an id
        """
        record = _as_record(reservation)
        _reject_id(record, "reservation", "reservation_id")
        created = await self._fetch_json(
            "create_reservation", "POST", "/reservations",
            data=record, signal=signal, on_cancel={}
        )
        return self._check_created(created, "reservation", "reservation_id")

    async def read_reservation(
        self,
        reservation_id: Union[int, str],
        signal: Optional[asyncio.Event] = None
    ) -> Optional[Dict[str, Any]]:
        """Retrieve a reservation by id."""
        return await self._fetch_json(
            "read_reservation", "GET", f"/reservations/{_segment(reservation_id)}",
            signal=signal, on_cancel={}
        )

    async def seat_reservation(
        self,
        reservation_id: Union[int, str],
        table: Record,
        signal: Optional[asyncio.Event] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Seat a reservation at a table.

        Args:
            reservation_id: Id of the reservation being seated
            table: Table record; only its ``table_id`` is used
            signal: Optional abort signal

        Returns:
            The updated table
        """
        table_id = _require_id(table, "table", "table_id")
        return await self._fetch_json(
            "seat_reservation", "PUT", f"/tables/{_segment(table_id)}/seat",
            data={"reservation_id": reservation_id},
            signal=signal, on_cancel={}
        )

    async def update_reservation(
        self,
        reservation: Record,
        signal: Optional[asyncio.Event] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Update an existing reservation.

        Args:
            reservation: Full reservation record including ``reservation_id``
            signal: Optional abort signal

        Returns:
            The updated reservation
        """
        record = _as_record(reservation)
        reservation_id = _require_id(record, "reservation", "reservation_id")
        return await self._fetch_json(
            "update_reservation", "PUT", f"/reservations/{_segment(reservation_id)}",
            data=record, signal=signal, on_cancel={}
        )

    async def update_reservation_status(
        self,
        reservation_id: Union[int, str],
        status: Union[ReservationStatus, str],
        signal: Optional[asyncio.Event] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Set a reservation's ``status``.

        Args:
            reservation_id: Id of the reservation to update
            status: New status; strings are sent verbatim
            signal: Optional abort signal

        Returns:
            The updated reservation
        """
        if isinstance(status, ReservationStatus):
            status = status.value
        return await self._fetch_json(
            "update_reservation_status", "PUT",
            f"/reservations/{_segment(reservation_id)}/status",
            data={"status": status}, signal=signal, on_cancel={}
        )

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    async def list_tables(
        self,
        signal: Optional[asyncio.Event] = None
    ) -> Optional[List[Dict[str, Any]]]:
        """Retrieve all tables."""
        return await self._fetch_json(
            "list_tables", "GET", "/tables", signal=signal, on_cancel=[]
        )

    async def create_table(
        self,
        table: Record,
        signal: Optional[asyncio.Event] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Save a new table.

        Args:
            table: Table to save; must not have a ``table_id``
            signal: Optional abort signal

        Returns:
            The saved table, which now has a ``table_id``

        Raises:
            RecordIdentifierError: If the table already has an id
        """
        record = _as_record(table)
        _reject_id(record, "table", "table_id")
        created = await self._fetch_json(
            "create_table", "POST", "/tables",
            data=record, signal=signal, on_cancel={}
        )
        return self._check_created(created, "table", "table_id")

    async def read_table_by_reservation(
        self,
        reservation_id: Union[int, str],
        signal: Optional[asyncio.Event] = None
    ) -> Optional[Dict[str, Any]]:
        """Retrieve the table a reservation is seated at."""
        return await self._fetch_json(
            "read_table_by_reservation", "GET",
            f"/tables/seated/{_segment(reservation_id)}",
            signal=signal, on_cancel={}
        )

    async def finish_table(
        self,
        table: Record,
        signal: Optional[asyncio.Event] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Free a table once its reservation is finished.

        Args:
            table: Table record; only its ``table_id`` is used
            signal: Optional abort signal

        Returns:
            The updated table
        """
        table_id = _require_id(table, "table", "table_id")
        return await self._fetch_json(
            "finish_table", "DELETE", f"/tables/{_segment(table_id)}/seat",
            signal=signal, on_cancel={}
        )

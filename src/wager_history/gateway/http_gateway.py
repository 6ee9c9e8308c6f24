"""
httpx-backed ledger gateway.

Maps the ledger REST endpoints onto the `LedgerGateway` and `GroupAdmin`
protocols. Transport errors, timeouts, non-2xx answers and unparseable
bodies all become `CollaboratorError`, so callers only handle one type.
"""

from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from wager_history.config import Settings, get_settings
from wager_history.domain.errors import CollaboratorError, DuplicateGroupError
from wager_history.domain.groups import Group, GroupDraft
from wager_history.domain.models import (
    GameOption,
    HistoryRecord,
    TypeOption,
    UpdatePayload,
    delete_entries,
)
from wager_history.gateway.abstract import AbstractLedgerGateway
from wager_history.infrastructure.http_factory import build_client
from wager_history.utils.logging import get_logger

log = get_logger(__name__)

NO_GROUP_ID = -1
_UNAUTHENTICATED = (401, 403)


class HttpLedgerGateway(AbstractLedgerGateway):
    """
    Ledger API client over a synchronous `httpx.Client`.

    Examples
    --------
        with HttpLedgerGateway() as gateway:
            records = gateway.fetch_records(7, 3, date(2024, 5, 1), 2)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or build_client(self._settings)

    def __enter__(self) -> "HttpLedgerGateway":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client and not self._client.is_closed:
            self._client.close()

    # -- transport -----------------------------------------------------

    def _request(self, operation: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            log.error(f"[{operation}] timeout", extra={"operation": operation, "url": url})
            raise CollaboratorError(operation, "timeout") from exc
        except httpx.RequestError as exc:
            log.error(
                f"[{operation}] request error",
                extra={"operation": operation, "url": url, "error": str(exc)},
            )
            raise CollaboratorError(operation, str(exc)) from exc

        if response.is_error:
            log.error(
                f"[{operation}] HTTP {response.status_code}",
                extra={"operation": operation, "url": url, "status_code": response.status_code},
            )
            raise CollaboratorError(
                operation,
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                details=response.text,
            )
        return response

    @staticmethod
    def _json(operation: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise CollaboratorError(operation, "response is not JSON") from exc

    # -- auth ----------------------------------------------------------

    def require_authenticated(self) -> bool:
        try:
            response = self._client.get(self._settings.auth_check_path)
        except httpx.HTTPError as exc:
            log.warning("Auth check failed", extra={"error": str(exc)})
            return False
        if response.status_code in _UNAUTHENTICATED:
            log.info("Session is no longer authenticated")
            return False
        return response.is_success

    # -- history -------------------------------------------------------

    def fetch_records(
        self, user_id: int, game_id: int, business_date: date, group_id: Optional[int]
    ) -> List[HistoryRecord]:
        operation = "fetch_records"
        body = {
            "uid": user_id,
            "game": game_id,
            "date": business_date.isoformat(),
            "gid": group_id if group_id is not None else NO_GROUP_ID,
        }
        data = self._json(operation, self._request(operation, "POST", "/history-by-uid", json=body))
        try:
            return [HistoryRecord.model_validate(row) for row in data]
        except (TypeError, ValidationError) as exc:
            raise CollaboratorError(operation, "unexpected record shape", details=str(exc)) from exc

    def submit_update(self, payload: UpdatePayload) -> None:
        self._request(
            "submit_update", "POST", "/createorupdatedata", json={"data": [payload.to_wire()]}
        )

    def submit_delete(self, ids: List[int]) -> None:
        entries = [entry.to_wire() for entry in delete_entries(ids)]
        self._request("submit_delete", "POST", "/createorupdatedata", json={"data": entries})

    # -- reference data ------------------------------------------------

    def fetch_type_options(self) -> List[TypeOption]:
        operation = "fetch_type_options"
        rows = self._json(operation, self._request(operation, "GET", "/types"))
        try:
            return [TypeOption(id=row["gameid"], label=row["gamename"]) for row in rows]
        except (KeyError, TypeError, ValidationError) as exc:
            raise CollaboratorError(operation, "unexpected type shape", details=str(exc)) from exc

    def fetch_games(self) -> List[GameOption]:
        operation = "fetch_games"
        rows = self._json(operation, self._request(operation, "GET", "/games"))
        try:
            return [GameOption(id=row["gameid"], name=row["gamename"]) for row in rows]
        except (KeyError, TypeError, ValidationError) as exc:
            raise CollaboratorError(operation, "unexpected game shape", details=str(exc)) from exc

    def fetch_user_groups(self, user_id: int) -> List[Group]:
        operation = "fetch_user_groups"
        rows = self._json(operation, self._request(operation, "GET", f"/user/groups/{user_id}"))
        return self._groups(operation, rows)

    # -- group administration ------------------------------------------

    def list_groups(self) -> List[Group]:
        operation = "list_groups"
        body = self._json(operation, self._request(operation, "GET", "/group"))
        rows = body.get("data", []) if isinstance(body, dict) else body
        return self._groups(operation, rows)

    def create_group(self, draft: GroupDraft) -> None:
        operation = "create_group"
        body = self._json(
            operation, self._request(operation, "POST", "/groups", json=draft.to_wire())
        )
        # The API echoes the existing row when the name is already taken.
        rows = body.get("data") if isinstance(body, dict) else None
        if rows and isinstance(rows, list) and rows[0].get("groupname") == draft.groupname:
            raise DuplicateGroupError(operation, f"group '{draft.groupname}' already exists")

    def update_group(self, group_id: int, draft: GroupDraft) -> None:
        self._request("update_group", "PUT", f"/groups/{group_id}", json=draft.to_wire())

    def delete_group(self, group_id: int) -> None:
        self._request("delete_group", "DELETE", f"/delete-group/{group_id}")

    @staticmethod
    def _groups(operation: str, rows: Any) -> List[Group]:
        try:
            return [Group.model_validate(row) for row in rows]
        except (TypeError, ValidationError) as exc:
            raise CollaboratorError(operation, "unexpected group shape", details=str(exc)) from exc


__all__ = ["HttpLedgerGateway", "NO_GROUP_ID"]

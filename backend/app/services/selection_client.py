"""Optimistic proposal-selection state for portal clients.

The server's selected_trip_id is only re-read on the next page load, so a
client keeps a local override on top of it. The precedence rule lives in one
place, ``effective_confirmed_id``: a local deselection beats everything, then
a local selection, then the server value. Local state only changes after the
server has accepted the request.
"""

import logging
import uuid
from dataclasses import dataclass

import httpx

from app.config import settings
from app.services.proposal_selection import (
    SelectionConflict,
    SelectionError,
    SelectionForbidden,
    SelectionNetworkError,
    SelectionNotFound,
)

logger = logging.getLogger(__name__)


@dataclass
class SelectionState:
    server_confirmed_id: int | None = None
    server_cotation_id: int | None = None
    dossier_status: str | None = None
    just_selected_id: int | None = None
    just_deselected: bool = False
    selected_cotation_id: int | None = None
    is_lead: bool = False

    def __post_init__(self):
        if self.selected_cotation_id is None:
            self.selected_cotation_id = self.server_cotation_id


def effective_confirmed_id(state: SelectionState) -> int | None:
    if state.just_deselected:
        return None
    if state.just_selected_id is not None:
        return state.just_selected_id
    return state.server_confirmed_id


def effective_cotation_id(state: SelectionState) -> int | None:
    return None if state.just_deselected else state.selected_cotation_id


def can_deselect(state: SelectionState, is_lead: bool, irrevocable_statuses: set[str]) -> bool:
    return (
        is_lead
        and effective_confirmed_id(state) is not None
        and (state.dossier_status or "") not in irrevocable_statuses
        and not state.just_deselected
    )


_ERRORS_BY_STATUS: dict[int, type[SelectionError]] = {
    403: SelectionForbidden,
    404: SelectionNotFound,
    409: SelectionConflict,
}


class ProposalSelectionClient:
    """Calls the choose/unchoose endpoints and keeps ``state`` in sync.

    One request per call, no retry. On any failure the state is left exactly
    as it was and the error is raised to the caller.
    """

    def __init__(
        self,
        dossier_id: uuid.UUID,
        participant_id: uuid.UUID,
        state: SelectionState | None = None,
        http_client: httpx.AsyncClient | None = None,
        irrevocable_statuses: set[str] | None = None,
    ):
        self.dossier_id = dossier_id
        self.participant_id = participant_id
        self.state = state or SelectionState()
        self.irrevocable_statuses = (
            irrevocable_statuses if irrevocable_statuses is not None
            else settings.irrevocable_status_set
        )
        self._client = http_client

    @property
    def effective_confirmed_id(self) -> int | None:
        return effective_confirmed_id(self.state)

    @property
    def effective_cotation_id(self) -> int | None:
        return effective_cotation_id(self.state)

    @property
    def can_deselect(self) -> bool:
        """Whether the "change my choice" action should be offered."""
        return can_deselect(self.state, self.state.is_lead, self.irrevocable_statuses)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=settings.portal_api_url,
                timeout=settings.portal_api_timeout,
            )
        return self._client

    async def _post(self, action: str, body: dict) -> dict:
        client = await self._get_client()
        url = f"/api/dossiers/{self.dossier_id}/proposals/{action}"
        try:
            resp = await client.post(url, json=body)
        except httpx.HTTPError as e:
            logger.warning(f"Proposal {action} failed for dossier {self.dossier_id}: {e}")
            raise SelectionNetworkError(f"Proposal {action} request failed: {e}") from e

        if resp.status_code >= 400:
            try:
                payload = resp.json()
            except ValueError:
                payload = None
            detail = payload.get("detail", resp.text) if isinstance(payload, dict) else resp.text
            error_cls = _ERRORS_BY_STATUS.get(resp.status_code, SelectionNetworkError)
            logger.warning(
                f"Proposal {action} rejected for dossier {self.dossier_id}: "
                f"{resp.status_code} {detail}"
            )
            raise error_cls(str(detail))

        try:
            return resp.json()
        except ValueError as e:
            raise SelectionNetworkError(f"Invalid response to proposal {action}") from e

    async def choose(self, trip_id: int, cotation_id: int | None = None) -> int | None:
        body = {"participant_id": str(self.participant_id), "trip_id": trip_id}
        if cotation_id is not None:
            body["cotation_id"] = cotation_id
        data = await self._post("choose", body)

        self.state.just_selected_id = trip_id
        self.state.just_deselected = False
        self.state.selected_cotation_id = cotation_id
        self.state.dossier_status = data.get("dossier_status", self.state.dossier_status)
        return self.effective_confirmed_id

    async def unchoose(self) -> int | None:
        if (self.state.dossier_status or "") in self.irrevocable_statuses:
            raise SelectionForbidden(
                f"Selection can no longer be changed in status '{self.state.dossier_status}'"
            )
        data = await self._post("unchoose", {"participant_id": str(self.participant_id)})

        self.state.just_deselected = True
        self.state.just_selected_id = None
        self.state.selected_cotation_id = None
        self.state.dossier_status = data.get("dossier_status", self.state.dossier_status)
        return self.effective_confirmed_id

    async def aclose(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

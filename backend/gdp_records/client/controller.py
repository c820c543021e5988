"""GDP Controller — owns the cached record list and drives the UI through GdpView.

Invariants:
    - state.records is only replaced by a successful full reload; failures leave state untouched
    - Filtering is local over state.records and never calls the API
    - Create vs update is decided by state.current_edit_id alone
    - Delete requires a positive answer from the confirm callback first
    - After a successful mutation the list and statistics are reloaded (no local patching)
    - Every terminal outcome of a user action produces a notification

Design Decisions:
    - State lives on the controller instance (ControllerState), no module globals
    - confirm may be sync or async so both dialog styles plug in
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Sequence

from gdp_records.client.api_client import GdpApiClient
from gdp_records.client.notifications import Notifier
from gdp_records.client.view import (
    Controls, GdpView, InputControl, NullView, form_values, to_row,
)
from gdp_records.core.envelope import Err, ErrorKind
from gdp_records.core.record_views import (
    DisplayStats, RecordFilter, compute_display_stats, filter_records,
)
from gdp_records.schemas.gdp_record import GdpRecordResponse

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], "bool | Awaitable[bool]"]

DELETE_PROMPT = "Are you sure you want to delete this GDP record?"


@dataclass
class ControllerState:
    records: list[GdpRecordResponse] = field(default_factory=list)
    current_edit_id: str | None = None


def _value(control: InputControl | None) -> str:
    return control.value if control is not None else ""


def _set(control: InputControl | None, value: str) -> None:
    if control is not None:
        control.value = value


def _failure_text(result: Err, fallback: str) -> str:
    """Server messages are shown as-is; transport/protocol failures get the fallback."""
    if result.kind in (ErrorKind.TRANSPORT, ErrorKind.PROTOCOL):
        return fallback
    return result.message or fallback


class GdpController:
    """Loads, filters and mutates GDP records on behalf of a UI."""

    def __init__(
        self,
        api: GdpApiClient,
        view: GdpView | None = None,
        controls: Controls | None = None,
        confirm: ConfirmFn | None = None,
        notifier: Notifier | None = None,
    ):
        self.api = api
        self.view = view or NullView()
        self.controls = controls or Controls()
        self.confirm = confirm or (lambda _message: False)
        self.notifier = notifier or Notifier(self.view)
        self.state = ControllerState()

    async def initialize(self) -> None:
        """First load: records, then statistics derived from them."""
        await self.refresh()

    async def refresh(self) -> bool:
        loaded = await self.load_records()
        self.load_statistics()
        return loaded

    # ─── Loading & rendering ─────────────────────────────────────

    async def load_records(self) -> bool:
        self.view.show_loading(True)
        try:
            result = await self.api.list_records()
            if isinstance(result, Err):
                logger.error(f"Loading records failed: {result.message} ({result.error})")
                self.notifier.error("Failed to load GDP records.")
                return False
            self.state.records = list(result.data)
            self._render(self.current_filter())
            return True
        finally:
            self.view.show_loading(False)

    def load_statistics(self) -> DisplayStats:
        stats = compute_display_stats(self.state.records)
        self.view.render_statistics(stats)
        return stats

    def _render(self, criteria: RecordFilter) -> list[GdpRecordResponse]:
        visible = filter_records(self.state.records, criteria)
        self.view.render_table([to_row(r) for r in visible])
        return visible

    # ─── Filters ─────────────────────────────────────────────────

    def current_filter(self) -> RecordFilter:
        return RecordFilter(
            country=_value(self.controls.search_country),
            region=_value(self.controls.filter_region),
            year=_value(self.controls.filter_year),
        )

    def filter_records(self) -> list[GdpRecordResponse]:
        """Re-render from the cache using the current filter controls."""
        return self._render(self.current_filter())

    def reset_filters(self) -> list[GdpRecordResponse]:
        _set(self.controls.search_country, "")
        _set(self.controls.filter_region, "")
        _set(self.controls.filter_year, "")
        return self._render(RecordFilter())

    # ─── Form ────────────────────────────────────────────────────

    def open_form(self, record: GdpRecordResponse | None = None) -> None:
        values = form_values(record) if record is not None else {}
        for name, control in (self.controls.form or {}).items():
            control.value = values.get(name, "")
        self.state.current_edit_id = str(record.id) if record is not None else None
        self.view.open_form(record)

    def close_form(self) -> None:
        self.view.close_form()
        self.state.current_edit_id = None

    def form_payload(self) -> dict[str, str]:
        """Flat key-value payload of every non-blank form field."""
        payload = {}
        for name, control in (self.controls.form or {}).items():
            value = control.value.strip()
            if value:
                payload[name] = value
        return payload

    # ─── Mutations ───────────────────────────────────────────────

    async def edit_record(self, record_id: str) -> bool:
        if not record_id:
            return False
        result = await self.api.get_record(record_id)
        if isinstance(result, Err):
            logger.error(f"Loading record {record_id} failed: {result.message}")
            self.notifier.error(_failure_text(result, "Error loading record"))
            return False
        self.open_form(result.data)
        return True

    async def submit_form(self) -> bool:
        if self.controls.form is None:
            return False
        payload = self.form_payload()
        edit_id = self.state.current_edit_id
        if edit_id:
            result = await self.api.update_record(edit_id, payload)
        else:
            result = await self.api.create_record(payload)

        if isinstance(result, Err):
            logger.error(f"Saving record failed: {result.message} ({result.error})")
            self.notifier.error(_failure_text(result, "Error saving record"))
            return False

        self.notifier.success("Updated successfully" if edit_id else "Created successfully")
        self.close_form()
        await self.refresh()
        return True

    async def delete_record(self, record_id: str) -> bool:
        if not record_id:
            return False
        if not await self._confirmed(DELETE_PROMPT):
            return False

        result = await self.api.delete_record(record_id)
        if isinstance(result, Err):
            logger.error(f"Deleting record {record_id} failed: {result.message}")
            self.notifier.error(_failure_text(result, "Error deleting record"))
            return False

        self.notifier.success("Record deleted successfully")
        await self.refresh()
        return True

    async def _confirmed(self, message: str) -> bool:
        answer = self.confirm(message)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    @property
    def visible_records(self) -> Sequence[GdpRecordResponse]:
        return filter_records(self.state.records, self.current_filter())

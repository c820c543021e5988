"""Client fixtures — a recording view and an API client bound to the test app."""

import pytest

from gdp_records.client.api_client import GdpApiClient
from gdp_records.client.controller import GdpController
from gdp_records.client.notifications import Notifier
from gdp_records.client.view import Controls, NullView


class RecordingView(NullView):
    """Keeps the last thing rendered of each kind."""

    def __init__(self):
        self.rows = None
        self.stats = None
        self.loading_calls: list[bool] = []
        self.form_open = False
        self.form_record = None
        self.shown = []
        self.dismissed = []

    def render_table(self, rows):
        self.rows = list(rows)

    def render_statistics(self, stats):
        self.stats = stats

    def show_loading(self, flag):
        self.loading_calls.append(flag)

    def open_form(self, record):
        self.form_open = True
        self.form_record = record

    def close_form(self):
        self.form_open = False

    def show_notification(self, notification):
        self.shown.append(notification)

    def dismiss_notification(self, notification):
        self.dismissed.append(notification)

    @property
    def messages(self) -> list[str]:
        return [n.message for n in self.shown]


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def api(client):
    return GdpApiClient(client)


@pytest.fixture
def make_controller(api, view):
    def _make(confirm=None, controls=None):
        return GdpController(
            api,
            view=view,
            controls=controls or Controls.full(),
            confirm=confirm,
            notifier=Notifier(view, dismiss_after=60),
        )
    return _make


@pytest.fixture
async def seed(api, record_payload):
    """Create records through the API and return them as parsed models."""
    async def _seed(*overrides):
        created = []
        for o in overrides:
            result = await api.create_record(record_payload(**o))
            created.append(result.data)
        return created
    return _seed

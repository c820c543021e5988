"""GdpController — cache, local filtering and mutation flows against the live test app.

Invariants:
    - Failed loads leave the cached list untouched and notify
    - Filters never hit the API
    - Successful mutations notify, close the form and reload
    - Delete without confirmation sends nothing
"""

import pytest

from gdp_records.client.controller import DELETE_PROMPT, GdpController
from gdp_records.client.view import Controls
from gdp_records.core.envelope import Err, ErrorKind


async def test_initialize_renders_records_and_stats(make_controller, view, seed):
    await seed(
        {"country": "Japan", "year": 2020, "region": "Asia"},
        {"country": "Japan", "year": 2021, "region": "Asia"},
        {"country": "France", "year": 2021, "region": "Europe"},
    )
    controller = make_controller()
    await controller.initialize()

    assert len(controller.state.records) == 3
    assert [r.year for r in view.rows] == [2021, 2021, 2020]
    assert (view.stats.total, view.stats.years, view.stats.regions) == (3, 2, 2)
    assert view.loading_calls == [True, False]


async def test_region_filter_is_local(make_controller, view, seed, api, monkeypatch):
    await seed(
        {"country": "Japan", "region": "Asia"},
        {"country": "France", "region": "Europe"},
    )
    controller = make_controller()
    await controller.initialize()

    async def no_network():
        raise AssertionError("filtering must not call the API")

    monkeypatch.setattr(api, "list_records", no_network)
    controller.controls.filter_region.value = "Asia"
    visible = controller.filter_records()
    assert [r.country for r in visible] == ["Japan"]
    assert [row.country for row in view.rows] == ["Japan"]
    assert len(controller.state.records) == 2


async def test_reset_filters_clears_controls(make_controller, view, seed):
    await seed({"country": "Japan", "region": "Asia"}, {"country": "Peru"})
    controller = make_controller()
    await controller.initialize()
    controller.controls.search_country.value = "jap"
    controller.filter_records()
    assert len(view.rows) == 1

    controller.reset_filters()
    assert controller.controls.search_country.value == ""
    assert len(view.rows) == 2


async def test_missing_controls_read_as_blank(api, view, seed):
    await seed({"country": "Japan"}, {"country": "Peru"})
    controller = GdpController(api, view=view, controls=Controls())
    await controller.initialize()
    assert len(controller.filter_records()) == 2
    assert await controller.submit_form() is False


async def test_load_failure_keeps_state(make_controller, view, seed, api, monkeypatch):
    await seed({"country": "Japan"})
    controller = make_controller()
    await controller.initialize()
    before = list(controller.state.records)

    async def offline():
        return Err(ErrorKind.TRANSPORT, "Could not reach the server")

    monkeypatch.setattr(api, "list_records", offline)
    assert await controller.load_records() is False
    assert controller.state.records == before
    assert view.messages[-1] == "Failed to load GDP records."
    assert view.loading_calls[-2:] == [True, False]


async def test_create_via_form(make_controller, view, record_payload):
    controller = make_controller()
    await controller.initialize()
    controller.open_form()
    assert controller.state.current_edit_id is None
    for name, value in record_payload().items():
        controller.controls.form[name].value = str(value)

    assert await controller.submit_form() is True
    assert view.messages[-1] == "Created successfully"
    assert view.form_open is False
    assert [r.country for r in controller.state.records] == ["Brazil"]
    assert view.stats.total == 1


async def test_create_with_blank_field_reports_server_message(make_controller, view, record_payload):
    controller = make_controller()
    controller.open_form()
    for name, value in record_payload(country="   ").items():
        controller.controls.form[name].value = str(value)
    assert "country" not in controller.form_payload()

    assert await controller.submit_form() is False
    assert view.messages[-1] == "Error creating GDP record"
    assert controller.state.records == []


async def test_edit_populates_form_and_updates(make_controller, view, seed):
    (record,) = await seed({"country": "Chile", "gdpInUsd": 3.0e11})
    controller = make_controller()
    await controller.initialize()

    assert await controller.edit_record(str(record.id)) is True
    form = controller.controls.form
    assert form["country"].value == "Chile"
    assert form["gdpInUsd"].value == "300000000000"
    assert controller.state.current_edit_id == str(record.id)
    assert view.form_record.id == record.id

    form["growthRate"].value = "2.5"
    assert await controller.submit_form() is True
    assert view.messages[-1] == "Updated successfully"
    assert controller.state.current_edit_id is None
    assert controller.state.records[0].growth_rate == 2.5
    assert len(controller.state.records) == 1


async def test_edit_unknown_record_notifies(make_controller, view):
    controller = make_controller()
    assert await controller.edit_record("00000000-0000-0000-0000-000000000000") is False
    assert view.messages[-1] == "GDP record not found"
    assert view.form_open is False


async def test_update_conflict_reports_server_message(make_controller, view, seed):
    _, second = await seed({"year": 2019}, {"year": 2020})
    controller = make_controller()
    await controller.initialize()
    await controller.edit_record(str(second.id))
    controller.controls.form["year"].value = "2019"

    assert await controller.submit_form() is False
    assert view.messages[-1] == "GDP record for this country and year already exists"
    assert view.form_open is True


async def test_delete_requires_confirmation(make_controller, view, seed):
    (record,) = await seed({})
    prompts = []

    def deny(message):
        prompts.append(message)
        return False

    controller = make_controller(confirm=deny)
    await controller.initialize()
    assert await controller.delete_record(str(record.id)) is False
    assert prompts == [DELETE_PROMPT]
    assert len(controller.state.records) == 1
    assert view.shown == []


@pytest.mark.parametrize("async_confirm", [False, True])
async def test_delete_confirmed_reloads(make_controller, view, seed, async_confirm):
    (record,) = await seed({})

    async def yes_async(message):
        return True

    controller = make_controller(confirm=yes_async if async_confirm else (lambda m: True))
    await controller.initialize()
    assert await controller.delete_record(str(record.id)) is True
    assert view.messages[-1] == "Record deleted successfully"
    assert controller.state.records == []
    assert view.stats.total == 0


async def test_delete_already_removed_notifies(make_controller, view, seed, api):
    (record,) = await seed({})
    controller = make_controller(confirm=lambda m: True)
    await controller.initialize()
    await api.delete_record(str(record.id))

    assert await controller.delete_record(str(record.id)) is False
    assert view.messages[-1] == "GDP record not found"
    assert len(controller.state.records) == 1

import asyncio
import logging
import re
import threading

from bson import ObjectId
from fastapi.testclient import TestClient

from customer_manager.app.main import create_app
from customer_manager.console import ConsoleReader, CustomerConsole

from .conftest import ScriptedReader


def run_console(service, *lines):
    console = CustomerConsole(service, ScriptedReader(*lines))
    asyncio.run(console.run())
    return console


def numbered_lines(out):
    return re.findall(r"^\d+\. Name: .*$", out, flags=re.MULTILINE)


def test_view_all_on_empty_store(service, capsys):
    console = run_console(service, "2", "5")
    out = capsys.readouterr().out
    assert "All customers:" in out
    assert numbered_lines(out) == []
    assert "Exiting..." in out
    assert console.running is False


def test_create_then_view(service, capsys):
    run_console(service, "1", "Ada", "30", "1", "Grace", "45", "2", "5")
    out = capsys.readouterr().out

    customer = asyncio.run(service.list_customers())[0]
    assert f"Customer created: ID: {customer.id}, Name: Ada, Age: 30" in out
    assert numbered_lines(out) == ["1. Name: Ada, Age: 30", "2. Name: Grace, Age: 45"]


def test_create_requires_both_fields(service, capsys):
    run_console(service, "1", "Ada", "", "5")
    out = capsys.readouterr().out
    assert "Both name and age are required!" in out
    assert asyncio.run(service.list_customers()) == []


def test_invalid_option_keeps_running(service, capsys):
    reader = ScriptedReader("9", "", "5")
    asyncio.run(CustomerConsole(service, reader).run())
    out = capsys.readouterr().out
    assert out.count("Invalid option. Please choose a valid action (1-5).") == 2
    assert reader.prompts == ["Choose an action(1-5): "] * 3


def test_update_existing_customer(service, capsys):
    created = asyncio.run(service.create_customer("Ada", "30"))

    run_console(service, "3", created.id, "Ada Lovelace", "36", "5")

    out = capsys.readouterr().out
    assert f"Customer updated: ID: {created.id}, Name: Ada Lovelace, Age: 36" in out


def test_update_unknown_customer(service, capsys):
    run_console(service, "3", str(ObjectId()), "Grace", "45", "5")
    assert "Customer not found." in capsys.readouterr().out


def test_delete_existing_customer(service, capsys):
    created = asyncio.run(service.create_customer("Ada", "30"))

    run_console(service, "4", created.id, "2", "5")

    out = capsys.readouterr().out
    assert f"Customer deleted: ID: {created.id}, Name: Ada, Age: 30" in out
    assert numbered_lines(out) == []


def test_delete_unknown_customer(service, capsys):
    run_console(service, "4", str(ObjectId()), "5")
    assert "Customer not found." in capsys.readouterr().out


def test_malformed_id_is_logged_and_loop_continues(service, capsys, caplog):
    with caplog.at_level(logging.ERROR, logger="customer_manager.console"):
        run_console(service, "4", "not-an-id", "3", "nope", "Ada", "30", "5")
    assert "Error deleting customer" in caplog.text
    assert "Error updating customer" in caplog.text
    assert "Exiting..." in capsys.readouterr().out


def test_database_failures_are_logged(broken_service, capsys, caplog):
    with caplog.at_level(logging.ERROR, logger="customer_manager.console"):
        console = run_console(broken_service, "1", "Ada", "30", "2", "5")
    assert "Error creating customer" in caplog.text
    assert "Error retrieving customers" in caplog.text
    assert "Exiting..." in capsys.readouterr().out
    assert console.running is False


def test_closed_input_stops_the_loop(service, caplog):
    with caplog.at_level(logging.INFO, logger="customer_manager.console"):
        console = run_console(service)
    assert console.running is False
    assert "Console input closed" in caplog.text


def test_quit_does_not_affect_web_serving(service):
    client = TestClient(create_app(service))
    run_console(service, "1", "Ada", "30", "5")

    r = client.get("/customers")
    assert r.status_code == 200
    assert "Name: Ada, Age: 30" in r.text


class BrokenReader:
    async def read(self, prompt):
        raise OSError(5, "Input/output error")


def test_unreadable_input_stops_the_loop(service, caplog):
    console = CustomerConsole(service, BrokenReader())
    with caplog.at_level(logging.ERROR, logger="customer_manager.console"):
        asyncio.run(console.run())
    assert console.running is False
    assert "Console input unavailable" in caplog.text


def test_console_reader_returns_typed_line(monkeypatch):
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return "2"

    monkeypatch.setattr("builtins.input", fake_input)

    assert asyncio.run(ConsoleReader().read("Choose an action(1-5): ")) == "2"
    assert prompts == ["Choose an action(1-5): "]


def test_console_reader_end_of_input_stops_the_menu(service, monkeypatch, capsys):
    def closed_input(prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed_input)

    console = CustomerConsole(service, ConsoleReader())
    asyncio.run(console.run())

    assert console.running is False
    assert capsys.readouterr().out.count("Welcome to the CRM") == 1


def test_console_reader_does_not_block_the_event_loop(monkeypatch):
    release = threading.Event()

    def waiting_input(prompt):
        release.wait(5)
        return "5"

    monkeypatch.setattr("builtins.input", waiting_input)

    async def scenario():
        pending = asyncio.create_task(ConsoleReader().read("> "))
        ticks = 0
        for _ in range(5):
            await asyncio.sleep(0.01)
            ticks += 1
        assert not pending.done()
        release.set()
        return ticks, await pending

    assert asyncio.run(scenario()) == (5, "5")

import asyncio
import json

import pytest

from app.services.email_service import EmailService
from app.services.notification_queue import NotificationQueue


def test_queue_runs_jobs_and_survives_failures():
    delivered = []

    async def _ok(label):
        delivered.append(label)

    async def _broken():
        raise RuntimeError("provider down")

    async def scenario():
        queue = NotificationQueue()
        await queue.start()
        queue.enqueue(lambda: _ok("first"))
        queue.enqueue(_broken, description="broken job")
        queue.enqueue(lambda: _ok("second"))
        await queue.stop()
        return queue.running

    assert asyncio.run(scenario()) is False
    assert delivered == ["first", "second"]


def test_queue_without_worker_dispatches_directly():
    delivered = []

    async def _ok():
        delivered.append("direct")

    async def scenario():
        queue = NotificationQueue()
        queue.enqueue(_ok)
        await asyncio.sleep(0)
        await asyncio.sleep(0)

    asyncio.run(scenario())
    assert delivered == ["direct"]


def test_detached_jobs_are_held_until_done():
    delivered = []

    async def _slow():
        await asyncio.sleep(0.01)
        delivered.append("slow")

    async def scenario():
        queue = NotificationQueue()
        queue.enqueue(_slow)
        pending = len(queue._detached)
        await queue.join()
        return pending, len(queue._detached)

    assert asyncio.run(scenario()) == (1, 0)
    assert delivered == ["slow"]


def test_console_provider_sends_nothing_over_smtp(caplog):
    service = EmailService(provider="console", from_address="events@example.com")
    event = {"id": 2, "name": "Coding Contest", "date": "2026-03-14", "venue": "Lab 1"}

    with caplog.at_level("INFO"):
        asyncio.run(service.send_registration_confirmation("Asha", "asha@example.com", "PSM_4", event))

    assert "asha@example.com" in caplog.text
    assert "14 March 2026" in caplog.text


def test_credentials_from_file(tmp_path):
    secrets_file = tmp_path / "mail.json"
    secrets_file.write_text(json.dumps({"user": "mailer", "password": "app-password"}))
    service = EmailService(provider="smtp", credentials_source=f"file:{secrets_file}")

    assert service._load_credentials() == ("mailer", "app-password")


def test_unknown_provider_rejected():
    with pytest.raises(ValueError):
        EmailService(provider="carrier-pigeon")

"""
Resume-Ready Webhook Tests

Backend → Telegram path:
  - Authentication and validation (no side effects on rejection)
  - Delivery ordering: document → HR contact → job id
  - Failure notices, soft success, delivery errors
"""

from unittest.mock import AsyncMock, call, patch

import pytest
from fastapi.testclient import TestClient

from main import app
from transport.telegram import TelegramTransportError
from webhook.delivery import DELIVERY_FAILED_TEXT, MISSING_FILE_TEXT

client = TestClient(app)

SECRET = "backend-secret"
HEADERS = {"x-api-key": SECRET}
USER_ID = 532287234


@pytest.fixture(autouse=True)
def backend_secret():
    with patch("config.Config.BACKEND_SECRET", SECRET):
        yield


@pytest.fixture
def transport():
    mock_transport = AsyncMock()
    with patch("webhook.resume_ready.get_telegram_transport", return_value=mock_transport):
        yield mock_transport


def post_ready(payload, headers=HEADERS):
    return client.post("/resume-ready", json=payload, headers=headers)


class TestAuthentication:
    """Bad or missing x-api-key never reaches Telegram."""

    def test_missing_key_returns_403(self, transport):
        response = post_ready({"userId": USER_ID, "tg_pdf_id": "X"}, headers={})

        assert response.status_code == 403
        assert transport.mock_calls == []

    def test_wrong_key_returns_403(self, transport):
        response = post_ready({"userId": USER_ID, "tg_pdf_id": "X"}, headers={"x-api-key": "guess"})

        assert response.status_code == 403
        assert transport.mock_calls == []

    @patch("config.Config.BACKEND_SECRET", "")
    def test_unconfigured_secret_rejects_everything(self, transport):
        response = post_ready({"userId": USER_ID}, headers={"x-api-key": ""})

        assert response.status_code == 403


class TestValidation:
    """Invalid bodies get 400 without side effects."""

    def test_missing_user_id(self, transport):
        response = post_ready({"tg_pdf_id": "X"})

        assert response.status_code == 400
        assert response.json() == {"error": "missing userId"}
        assert transport.mock_calls == []

    def test_empty_user_id(self, transport):
        response = post_ready({"userId": "", "tg_pdf_id": "X"})

        assert response.status_code == 400
        assert response.json() == {"error": "missing userId"}

    def test_invalid_json(self, transport):
        response = client.post(
            "/resume-ready",
            content=b"{not json",
            headers={**HEADERS, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "invalid JSON"}
        assert transport.mock_calls == []

    def test_wrong_field_type(self, transport):
        response = post_ready({"userId": USER_ID, "tg_pdf_id": {"nested": True}})

        assert response.status_code == 400
        assert response.json() == {"error": "invalid payload"}
        assert transport.mock_calls == []


class TestCompletedDelivery:
    """status == completed (the default)."""

    def test_document_hr_and_job_id_in_order(self, transport):
        response = post_ready({
            "userId": USER_ID,
            "status": "completed",
            "tg_pdf_id": "X",
            "hrEmail": "h@x.com",
            "jobId": "J1",
        })

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert transport.mock_calls == [
            call.send_document(USER_ID, "X", caption="Your resume (HR Contact: h@x.com)"),
            call.send_message(USER_ID, "🔎 HR Contact found: h@x.com"),
            call.send_message(USER_ID, "Job ID: J1"),
        ]

    def test_file_id_preferred_over_url(self, transport):
        post_ready({"userId": USER_ID, "tg_pdf_id": "X", "pdf_url": "https://files.example.com/r.pdf"})

        transport.send_document.assert_awaited_once_with(USER_ID, "X", caption="Your resume (generated).")

    def test_url_used_without_file_id(self, transport):
        response = post_ready({"userId": USER_ID, "pdf_url": "https://files.example.com/r.pdf"})

        assert response.status_code == 200
        assert transport.mock_calls == [
            call.send_document(USER_ID, "https://files.example.com/r.pdf", caption="Your resume (generated)."),
        ]

    def test_hr_contact_alias(self, transport):
        post_ready({"userId": USER_ID, "tg_pdf_id": "X", "hr_contact": "jane@corp.com"})

        assert transport.mock_calls == [
            call.send_document(USER_ID, "X", caption="Your resume (HR Contact: jane@corp.com)"),
            call.send_message(USER_ID, "🔎 HR Contact found: jane@corp.com"),
        ]

    def test_missing_status_means_completed(self, transport):
        response = post_ready({"userId": USER_ID, "tg_pdf_id": "X", "status": None})

        assert response.status_code == 200
        transport.send_document.assert_awaited_once()

    def test_numeric_file_id_is_sent_as_text(self, transport):
        response = post_ready({"userId": USER_ID, "tg_pdf_id": 12345})

        assert response.status_code == 200
        assert transport.mock_calls == [
            call.send_document(USER_ID, "12345", caption="Your resume (generated)."),
        ]

    def test_latex_id_is_never_sent(self, transport):
        post_ready({"userId": USER_ID, "tg_pdf_id": "X", "tg_latex_id": "L"})

        transport.send_document.assert_awaited_once_with(USER_ID, "X", caption="Your resume (generated).")

    def test_string_user_id_is_passed_through(self, transport):
        post_ready({"userId": "532287234", "tg_pdf_id": "X"})

        transport.send_document.assert_awaited_once_with("532287234", "X", caption="Your resume (generated).")

    def test_no_document_is_soft_success(self, transport, caplog):
        with caplog.at_level("WARNING"):
            response = post_ready({"userId": USER_ID, "status": "completed"})

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert transport.mock_calls == [call.send_message(USER_ID, MISSING_FILE_TEXT)]
        assert any("missing file" in record.getMessage() for record in caplog.records)

    def test_hr_contact_sent_even_without_document(self, transport):
        post_ready({"userId": USER_ID, "hrEmail": "h@x.com", "jobId": "J9"})

        assert transport.mock_calls == [
            call.send_message(USER_ID, MISSING_FILE_TEXT),
            call.send_message(USER_ID, "🔎 HR Contact found: h@x.com"),
            call.send_message(USER_ID, "Job ID: J9"),
        ]

    def test_replay_is_not_deduplicated(self, transport):
        payload = {"userId": USER_ID, "tg_pdf_id": "X", "hrEmail": "h@x.com", "jobId": "J1"}

        first = post_ready(payload)
        second = post_ready(payload)

        assert first.status_code == second.status_code == 200
        assert len(transport.mock_calls) == 6
        assert transport.mock_calls[:3] == transport.mock_calls[3:]


class TestFailedStatus:
    """status != completed relays a failure notice."""

    def test_failure_names_job_id(self, transport):
        response = post_ready({"userId": USER_ID, "status": "failed", "jobId": "J2", "tg_pdf_id": "X"})

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        transport.send_message.assert_awaited_once()
        assert "J2" in transport.send_message.call_args[0][1]
        transport.send_document.assert_not_called()

    def test_failure_without_job_id(self, transport):
        response = post_ready({"userId": USER_ID, "status": "failed"})

        assert response.status_code == 200
        text = transport.send_message.call_args[0][1]
        assert text.startswith("❌ Resume generation failed")

    def test_any_other_status_is_failure(self, transport):
        post_ready({"userId": USER_ID, "status": "cancelled", "jobId": "J3"})

        transport.send_document.assert_not_called()
        assert "J3" in transport.send_message.call_args[0][1]

    def test_numeric_status_is_relayed_as_failure(self, transport):
        response = post_ready({"userId": USER_ID, "status": 2, "jobId": "J"})

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        transport.send_document.assert_not_called()
        transport.send_message.assert_awaited_once()
        assert "J" in transport.send_message.call_args[0][1]

    def test_failure_notice_send_error_returns_500(self, transport):
        transport.send_message.side_effect = TelegramTransportError("chat not found")

        response = post_ready({"userId": USER_ID, "status": "failed", "jobId": "J2"})

        assert response.status_code == 500
        assert response.json() == {"error": "internal error"}


class TestDeliveryFailures:
    """Any send error during delivery answers 500 and notifies the user."""

    def test_document_failure(self, transport):
        transport.send_document.side_effect = TelegramTransportError("wrong file identifier")

        response = post_ready({"userId": USER_ID, "tg_pdf_id": "X", "hrEmail": "h@x.com", "jobId": "J1"})

        assert response.status_code == 500
        assert response.json() == {"error": "failed to deliver resume"}
        assert transport.send_message.call_args_list == [call(USER_ID, DELIVERY_FAILED_TEXT)]

    def test_follow_up_failure_after_document(self, transport):
        transport.send_message.side_effect = [TelegramTransportError("flood wait"), None]

        response = post_ready({"userId": USER_ID, "tg_pdf_id": "X", "hrEmail": "h@x.com", "jobId": "J1"})

        assert response.status_code == 500
        assert response.json() == {"error": "failed to deliver resume"}
        assert transport.mock_calls == [
            call.send_document(USER_ID, "X", caption="Your resume (HR Contact: h@x.com)"),
            call.send_message(USER_ID, "🔎 HR Contact found: h@x.com"),
            call.send_message(USER_ID, DELIVERY_FAILED_TEXT),
        ]

    def test_failure_notice_error_is_swallowed(self, transport):
        transport.send_document.side_effect = TelegramTransportError("down")
        transport.send_message.side_effect = TelegramTransportError("still down")

        response = post_ready({"userId": USER_ID, "tg_pdf_id": "X"})

        assert response.status_code == 500
        assert response.json() == {"error": "failed to deliver resume"}

    def test_transport_creation_error_returns_500(self):
        with patch("webhook.resume_ready.get_telegram_transport", side_effect=ValueError("TELEGRAM_BOT_TOKEN not set")):
            response = post_ready({"userId": USER_ID, "tg_pdf_id": "X"})

        assert response.status_code == 500
        assert response.json() == {"error": "internal error"}

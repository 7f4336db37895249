from unittest.mock import MagicMock

import pytest
import requests

from backend import BYPASS_ORDER_ID
from dispatcher import FormSubmissionService, SubmitFormRequest
from reference_docs import SelectedPromptFile

WEBHOOK = "https://hook.example.com/abc"


def make_response(status=200, json_body=None, text="", content_type="application/json"):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.reason = "OK" if response.ok else "Bad Gateway"
    response.headers = {"content-type": content_type}
    response.text = text
    if json_body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_body
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def shop_client():
    client = MagicMock()
    client.archive_processed_order.return_value = {"success": True, "message": ""}
    return client


def tutela_request(**overrides):
    values = dict(
        form_type="tutela",
        form_data={"userName": "Ana", "email": "ana@example.com", "facts": "Hechos", "expectation": "Orden"},
        order_data={"id": "gid://order/1", "orderNumber": "1042"},
        delivery_email=" ana@example.com ",
        shop_name="CG Asesores",
    )
    values.update(overrides)
    return SubmitFormRequest(**values)


def transito_request(content="Plantilla audiencia"):
    return SubmitFormRequest(
        form_type="transito",
        form_data={"typeId": "CC", "idNumber": "52123456", "procedureType": "audiencia-virtual"},
        order_data={"id": "gid://order/2", "orderNumber": "2001"},
        prompt_content={
            "procedureType": SelectedPromptFile(handle="audiencia-virtual", name="Audiencia", content=content)
        },
        delivery_email="ana@example.com",
        shop_name="CG Asesores",
    )


class TestPayloadChecks:

    def test_structure_ok(self):
        ok, errors = FormSubmissionService(WEBHOOK).validate_form_structure(tutela_request())
        assert ok and errors == []

    def test_structure_missing_base_field(self):
        request = tutela_request(form_data={"userName": "Ana"})
        ok, errors = FormSubmissionService(WEBHOOK).validate_form_structure(request)
        assert not ok
        assert "Campo requerido: facts" in errors

    def test_structure_missing_order(self):
        ok, errors = FormSubmissionService(WEBHOOK).validate_form_structure(tutela_request(order_data={}))
        assert "Información del pedido requerida" in errors

    def test_transito_needs_a_specific_field(self):
        request = transito_request()
        request.form_data = {"typeId": "CC", "idNumber": "1"}
        ok, errors = FormSubmissionService(WEBHOOK).validate_form_structure(request)
        assert not ok
        assert any("tránsito" in e for e in errors)

    def test_transito_needs_reference_content(self):
        service = FormSubmissionService(WEBHOOK)
        ok, errors = service.validate_payload_completeness(transito_request(content="  "))
        assert not ok
        assert "Contenido del tipo de procedimiento requerido para tránsito" in errors

    def test_delivery_email_required(self):
        ok, errors = FormSubmissionService(WEBHOOK).validate_payload_completeness(
            tutela_request(delivery_email=""))
        assert errors == ["Email de entrega requerido"]


class TestSubmitForm:

    def test_not_configured(self, session):
        service = FormSubmissionService("", session=session)
        assert not service.is_configured()
        result = service.submit_form(tutela_request())
        assert not result.success
        session.post.assert_not_called()

    def test_posts_once_with_payload(self, session):
        session.post.return_value = make_response(json_body={"success": True, "message": "ok", "documentId": "D1"})
        service = FormSubmissionService(WEBHOOK, session=session)

        result = service.submit_form(tutela_request())

        assert result.success
        assert result.document_id == "D1"
        session.post.assert_called_once()
        payload = session.post.call_args.kwargs["json"]
        assert payload["formType"] == "tutela"
        assert payload["deliveryEmail"] == "ana@example.com"
        assert payload["orderData"]["orderNumber"] == "1042"
        assert payload["promptContent"] == {}

    def test_reference_content_in_payload(self, session):
        session.post.return_value = make_response(json_body={"success": True, "message": "ok"})
        FormSubmissionService(WEBHOOK, session=session).submit_form(transito_request())
        payload = session.post.call_args.kwargs["json"]
        assert payload["promptContent"]["procedureType"] == {
            "handle": "audiencia-virtual", "name": "Audiencia", "content": "Plantilla audiencia",
        }

    def test_invalid_request_not_sent(self, session):
        service = FormSubmissionService(WEBHOOK, session=session)
        result = service.submit_form(tutela_request(shop_name=" "))
        assert not result.success
        assert "Nombre de la tienda requerido" in result.message
        session.post.assert_not_called()

    def test_http_error_reported(self, session):
        session.post.return_value = make_response(status=502, json_body={})
        result = FormSubmissionService(WEBHOOK, session=session).submit_form(tutela_request())
        assert not result.success
        assert "502" in result.message

    def test_network_error_reported(self, session):
        session.post.side_effect = requests.ConnectionError("down")
        result = FormSubmissionService(WEBHOOK, session=session).submit_form(tutela_request())
        assert not result.success
        assert "down" in result.message

    def test_plain_text_response(self, session):
        session.post.return_value = make_response(text="Accepted", content_type="text/plain")
        result = FormSubmissionService(WEBHOOK, session=session).submit_form(tutela_request())
        assert result.success
        assert "Accepted" in result.message
        assert result.document_id.startswith("WEBHOOK-")

    def test_unparseable_json(self, session):
        session.post.return_value = make_response(json_body=None)
        result = FormSubmissionService(WEBHOOK, session=session).submit_form(tutela_request())
        assert result.success
        assert "error parsing response" in result.message

    def test_status_200_archives_order(self, session, shop_client):
        session.post.return_value = make_response(json_body={"status": 200})
        service = FormSubmissionService(WEBHOOK, shop_client=shop_client, session=session)

        result = service.submit_form(tutela_request())

        shop_client.archive_processed_order.assert_called_once_with("1042", "ana@example.com")
        assert result.message.endswith("Orden archivada correctamente.")

    def test_archive_failure_is_a_warning(self, session, shop_client):
        shop_client.archive_processed_order.return_value = {"success": False, "message": "sin permisos"}
        session.post.return_value = make_response(json_body={"status": 200})
        result = FormSubmissionService(WEBHOOK, shop_client=shop_client, session=session).submit_form(
            tutela_request())
        assert result.success
        assert "Advertencia: sin permisos" in result.message

    def test_bypass_order_not_archived(self, session, shop_client):
        session.post.return_value = make_response(json_body={"status": 200})
        request = tutela_request(order_data={"id": BYPASS_ORDER_ID, "orderNumber": "1"})
        FormSubmissionService(WEBHOOK, shop_client=shop_client, session=session).submit_form(request)
        shop_client.archive_processed_order.assert_not_called()

    def test_other_status_not_archived(self, session, shop_client):
        session.post.return_value = make_response(json_body={"status": 202})
        FormSubmissionService(WEBHOOK, shop_client=shop_client, session=session).submit_form(tutela_request())
        shop_client.archive_processed_order.assert_not_called()

import time
from typing import Any, Dict, List, Optional, Tuple

import requests
from pydantic import BaseModel, Field

from backend import BYPASS_ORDER_ID
from logger import get_logger
from reference_docs import SelectedPromptFile

log = get_logger("dispatcher")

# Base fields the downstream processor cannot work without
STRUCTURE_REQUIRED = {
    "tutela": ["userName", "email", "facts", "expectation"],
    "peticion": ["userName", "idNumber", "targetEntity", "petitionRequest",
                 "petitionReasons", "responseEmail"],
    "transito": ["typeId", "idNumber"],
}


class SubmitFormRequest(BaseModel):
    form_type: str
    form_data: Dict[str, Any]
    order_data: Dict[str, Any]
    prompt_content: Dict[str, SelectedPromptFile] = Field(default_factory=dict)
    delivery_email: str
    shop_name: str


class SubmitFormResponse(BaseModel):
    success: bool
    message: str
    document_url: Optional[str] = None
    document_id: Optional[str] = None


def _blank(value):
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return value is None or str(value).strip() == ""


def _webhook_document_id():
    return f"WEBHOOK-{int(time.time() * 1000)}"


class FormSubmissionService:
    """Delivers a filled form to the document-processing webhook, once."""

    def __init__(self, webhook_url, shop_client=None, session=None, timeout=30):
        self.webhook_url = webhook_url or ""
        self.shop_client = shop_client
        self.session = session or requests.Session()
        self.timeout = timeout
        if not self.webhook_url:
            log.warning("MAKE_WEBHOOK is not configured; submissions will fail")

    def is_configured(self):
        return bool(self.webhook_url)

    def validate_form_structure(self, request: SubmitFormRequest) -> Tuple[bool, List[str]]:
        errors = []
        if not request.form_type:
            errors.append("Tipo de formulario requerido")
        if not request.form_data:
            errors.append("Datos del formulario requeridos")
        if not request.order_data or not request.order_data.get("orderNumber"):
            errors.append("Información del pedido requerida")

        for field_id in STRUCTURE_REQUIRED.get(request.form_type, []):
            if _blank(request.form_data.get(field_id)):
                errors.append(f"Campo requerido: {field_id}")

        if request.form_type == "transito":
            base = set(STRUCTURE_REQUIRED["transito"])
            filled = [k for k, val in request.form_data.items() if k not in base and not _blank(val)]
            if not filled:
                errors.append("Al menos un campo específico del formulario de tránsito debe estar completado")

        return not errors, errors

    def validate_payload_completeness(self, request: SubmitFormRequest) -> Tuple[bool, List[str]]:
        errors = []
        if _blank(request.delivery_email):
            errors.append("Email de entrega requerido")
        if _blank(request.shop_name):
            errors.append("Nombre de la tienda requerido")

        if request.form_type == "transito":
            # The processor builds tránsito documents from the procedure's reference text
            if not request.prompt_content:
                errors.append("Contenido de prompt files requerido para formularios de tránsito")
            else:
                procedure = request.prompt_content.get("procedureType")
                if procedure is None or _blank(procedure.content):
                    errors.append("Contenido del tipo de procedimiento requerido para tránsito")

        for key, doc in request.prompt_content.items():
            if _blank(doc.content):
                errors.append(f"Contenido del prompt file '{key}' está vacío")
            if _blank(doc.handle):
                errors.append(f"Handle del prompt file '{key}' está vacío")
            if _blank(doc.name):
                errors.append(f"Nombre del prompt file '{key}' está vacío")

        return not errors, errors

    def build_payload(self, request: SubmitFormRequest):
        return {
            "formType": request.form_type,
            "formData": request.form_data,
            "orderData": request.order_data,
            "promptContent": {
                key: {"handle": doc.handle, "name": doc.name, "content": doc.content}
                for key, doc in request.prompt_content.items()
            },
            "deliveryEmail": request.delivery_email.strip(),
            "shopName": request.shop_name.strip(),
        }

    def _read_response(self, response):
        """Returns (SubmitFormResponse, status reported in the body or None)."""
        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            text = response.text or "Sin contenido"
            return SubmitFormResponse(
                success=True,
                message=f"Formulario enviado exitosamente al webhook. Respuesta: {text}",
                document_id=_webhook_document_id(),
            ), None

        try:
            body = response.json()
        except ValueError as e:
            log.warning("Could not parse webhook response: %s", e)
            return SubmitFormResponse(
                success=True,
                message="Formulario enviado exitosamente al webhook (error parsing response)",
                document_id=_webhook_document_id(),
            ), None

        if not isinstance(body, dict):
            body = {"data": body}
        status = body.get("status") if isinstance(body.get("status"), int) else None
        if "success" in body:
            return SubmitFormResponse(
                success=bool(body["success"]),
                message=str(body.get("message", "")),
                document_url=body.get("documentUrl"),
                document_id=body.get("documentId"),
            ), status
        return SubmitFormResponse(
            success=True,
            message=f"Formulario enviado exitosamente al webhook. Respuesta: {body}",
            document_id=body.get("documentId") or _webhook_document_id(),
        ), status

    def _archive_order(self, request, result):
        archive = self.shop_client.archive_processed_order(
            request.order_data.get("orderNumber"), request.delivery_email.strip()
        )
        if archive.get("success"):
            log.info("Order %s archived", request.order_data.get("orderNumber"))
            result.message += " - Orden archivada correctamente."
        else:
            log.warning("Order archive failed: %s", archive.get("message"))
            result.message += f" - Advertencia: {archive.get('message')}"

    def submit_form(self, request: SubmitFormRequest) -> SubmitFormResponse:
        if not self.webhook_url:
            return SubmitFormResponse(
                success=False,
                message="Error al enviar formulario: Webhook URL no configurado. Verifica MAKE_WEBHOOK",
            )

        ok, errors = self.validate_form_structure(request)
        if not ok:
            return SubmitFormResponse(
                success=False,
                message=f"Error al enviar formulario: Validación de estructura falló: {', '.join(errors)}",
            )
        ok, errors = self.validate_payload_completeness(request)
        if not ok:
            return SubmitFormResponse(
                success=False,
                message=f"Error al enviar formulario: Validación de payload falló: {', '.join(errors)}",
            )

        payload = self.build_payload(request)
        log.info(
            "Sending %s form for order %s (%d fields, reference docs: %s)",
            request.form_type, request.order_data.get("orderNumber"),
            len(request.form_data), list(payload["promptContent"]),
        )

        try:
            response = self.session.post(self.webhook_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            log.error("Webhook request failed: %s", e)
            return SubmitFormResponse(success=False, message=f"Error al enviar formulario: {e}")

        if not response.ok:
            log.error("Webhook answered %s", response.status_code)
            return SubmitFormResponse(
                success=False,
                message=f"Error al enviar formulario: Error del webhook: {response.status_code} - {response.reason}",
            )

        result, status = self._read_response(response)

        is_bypass = request.order_data.get("id") == BYPASS_ORDER_ID
        if status == 200 and not is_bypass and self.shop_client is not None:
            self._archive_order(request, result)
        elif is_bypass:
            log.info("Bypass order, skipping archive")

        log.info("Form sent: %s", result.message)
        return result

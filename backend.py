import requests

from logger import get_logger
from reference_docs import PromptFile

log = get_logger("shop")

BYPASS_ORDER_ID = "bypass-mode"


class ShopClient:
    """Talks to the store's serverless API (orders, shop info, reference documents)."""

    def __init__(self, base_url, session=None, timeout=15):
        self.base_url = (base_url or "").rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not response.ok:
            message = body.get("message") or f"HTTP {response.status_code}"
            raise requests.HTTPError(message, response=response)
        return body

    def lookup_order(self, order_number, confirmation_code):
        log.info("Looking up order %s", order_number)
        try:
            body = self._request(
                "POST", "/api/orders",
                json={"orderNumber": str(order_number).strip(),
                      "confirmationCode": str(confirmation_code).strip()},
            )
        except requests.RequestException as e:
            log.warning("Order lookup failed: %s", e)
            return {"success": False, "message": f"Error buscando el pedido: {e}"}
        return {
            "success": bool(body.get("success")),
            "data": body.get("data"),
            "message": body.get("message", ""),
        }

    def check_order_processed(self, order_number, confirmation_code):
        try:
            body = self._request(
                "POST", "/api/validation",
                json={"orderNumber": str(order_number).strip(),
                      "confirmationCode": str(confirmation_code).strip()},
            )
        except requests.RequestException as e:
            log.warning("Processed-order check failed: %s", e)
            return {"success": False, "isProcessed": None, "allowBypass": False,
                    "message": str(e)}
        return {
            "success": bool(body.get("success")),
            "isProcessed": body.get("isProcessed"),
            "allowBypass": bool(body.get("allowBypass")),
            "message": body.get("message", ""),
        }

    def get_shop_name(self, default):
        try:
            body = self._request("GET", "/api/shop")
        except requests.RequestException as e:
            log.warning("Shop name unavailable, using default: %s", e)
            return default
        return (body.get("data") or {}).get("name") or default

    def get_prompt_files(self, use_case):
        """Reference documents for a document type, keyed by handle."""
        try:
            body = self._request(
                "GET", "/api/promptFiles",
                params={"useCase": use_case, "withContent": "true"},
            )
        except requests.RequestException as e:
            log.warning("Reference documents for %s unavailable: %s", use_case, e)
            return {"success": False, "promptFiles": {}, "message": str(e)}
        files = {
            handle: PromptFile.model_validate(raw)
            for handle, raw in (body.get("promptFiles") or {}).items()
        }
        log.info("Loaded %d reference documents for %s", len(files), use_case)
        return {"success": bool(body.get("success", True)), "promptFiles": files,
                "message": body.get("message", "")}

    def archive_processed_order(self, order_number, target_email):
        try:
            body = self._request(
                "POST", "/api/archive",
                json={"orderNumber": order_number, "targetEmail": target_email},
            )
        except requests.RequestException as e:
            log.error("Archiving order %s failed: %s", order_number, e)
            return {"success": False, "message": str(e)}
        return {"success": bool(body.get("success")), "message": body.get("message", "")}

    def test_connection(self):
        try:
            body = self._request("GET", "/api/health")
        except requests.RequestException as e:
            return {"success": False, "message": str(e)}
        return {"success": True, "message": "Conexión exitosa", "data": body}

# ==========================================
# ⚙️ CLIENT CONFIGURATION FILE
# ==========================================
# Edit this file to re-brand the intake for a new firm.
import os

import streamlit as st

# --- BRANDING ---
APP_TITLE = "Asistente de Documentos Legales"   # Shows in browser tab
PAGE_ICON = "⚖️"
SHOP_NAME = "CG Asesores"                        # Fallback when the shop API is down
TAGLINE = "Diligencie su documento en pocos minutos"

# --- LINKS ---
CONTACT_URL = "https://cgasesores.co/pages/contact"

# --- ORDER LOOKUP COPY ---
ORDER_NUMBER_LABEL = "Número de pedido"
ORDER_NUMBER_PLACEHOLDER = "Ej. 1042"
CONFIRMATION_CODE_LABEL = "Código de confirmación"
LOOKUP_BUTTON = "Buscar pedido"
UNPAID_ORDER_MSG = "Este pedido aún no registra pago."
UNPAID_ORDER_SUGGESTION = "Si ya pagó, comuníquese con nosotros:"
PROCESSED_ORDER_MSG = "Este pedido ya fue procesado el {date} y enviado a {email}."
DISAGREEMENT_SUGGESTION = "Si no reconoce este envío, contáctenos:"
BYPASS_TITLE = "Modo de prueba"
BYPASS_MESSAGE = "Seleccione manualmente el tipo de documento a diligenciar."

# --- FOOTER ---
USE_PREVIOUS_EMAIL_LABEL = "Usar el correo registrado en el pedido anterior"
SUBMITTING_TITLE = "Enviando su solicitud"
SUBMITTING_MESSAGE = "Estamos generando su documento, no cierre esta ventana."
SUBMIT_BUTTON = "Generar documento"


def get_setting(key, default=None):
    """st.secrets first, then the environment."""
    try:
        if key in st.secrets:
            return st.secrets[key]
    except FileNotFoundError:
        pass  # no secrets.toml outside Streamlit Cloud
    return os.environ.get(key, default)


def is_enabled(key):
    return str(get_setting(key, "false")).strip().lower() == "true"

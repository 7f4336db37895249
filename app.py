import streamlit as st

import client_settings as cs
from backend import BYPASS_ORDER_ID, ShopClient
from config import (
    DELIVERY_EMAIL_FIELD,
    FORM_LIBRARY,
    FORM_TYPES,
    build_engine,
    create_initial_form_data,
    get_dynamic_label,
    get_form_type,
)
from dispatcher import FormSubmissionService, SubmitFormRequest
from field_validators import ORDER_NUMBER, run_validators
from form_engine import FieldKind
from logger import get_logger, load_logs, log_submission
from mock_data import MOCK_DELIVERY_EMAIL, auto_fill
from reference_docs import prepare_for_submission, to_select_options

st.set_page_config(page_title=cs.APP_TITLE, page_icon=cs.PAGE_ICON)
log = get_logger("app")

shop = ShopClient(cs.get_setting("API_BASE_URL", ""))
submitter = FormSubmissionService(cs.get_setting("MAKE_WEBHOOK", ""), shop_client=shop)

# --- STATE INITIALIZATION ---
defaults = {
    "stage": "lookup",
    "order": None,
    "processed": None,
    "form_type": None,
    "form_data": {},
    "prompt_files": {},
    "errors": {},
    "result": None,
}
for key, value in defaults.items():
    if key not in st.session_state:
        st.session_state[key] = value

if "shop_name" not in st.session_state:
    st.session_state.shop_name = shop.get_shop_name(cs.SHOP_NAME)


def start_form(form_type):
    st.session_state.form_type = form_type
    data = create_initial_form_data(form_type)
    st.session_state.form_data = auto_fill(form_type, data, cs.is_enabled("AUTO_FILL_FORMS"))
    files = shop.get_prompt_files(FORM_LIBRARY[form_type]["prompt_use_case"])
    st.session_state.prompt_files = files["promptFiles"]
    st.session_state.errors = {}
    st.session_state.stage = "form"


def render_field(descriptor, label, value):
    """One widget per field kind; returns the new value."""
    key = f"field_{descriptor.id}"
    if descriptor.required:
        label = f"{label} *"

    if descriptor.kind == FieldKind.TEXTAREA:
        return st.text_area(label, value=value or "", placeholder=descriptor.placeholder, key=key)

    if descriptor.kind in (FieldKind.SELECT, FieldKind.MULTISELECT):
        options = list(descriptor.options)
        if descriptor.id == "procedureType" and st.session_state.prompt_files:
            options = to_select_options(st.session_state.prompt_files)
        values = [opt[0] for opt in options]
        labels = dict(options)
        if descriptor.kind == FieldKind.MULTISELECT:
            current = [v for v in (value or []) if v in values]
            return st.multiselect(label, values, default=current,
                                  format_func=lambda v: labels.get(v, v), key=key)
        index = values.index(value) if value in values else None
        return st.selectbox(label, values, index=index, placeholder="Seleccione una opción",
                            format_func=lambda v: labels.get(v, v), key=key) or ""

    return st.text_input(label, value=value or "", placeholder=descriptor.placeholder, key=key)


# --- SIDEBAR ---
with st.sidebar:
    st.header(st.session_state.shop_name)
    st.caption(cs.TAGLINE)

    if st.session_state.stage == "form":
        engine = build_engine(st.session_state.form_type)
        stats = engine.get_form_stats(st.session_state.form_data)
        done = stats.visible_fields - stats.error_count
        st.progress(done / max(stats.visible_fields, 1),
                    text=f"Campos completos: {done} de {stats.visible_fields}")

    with st.expander("💼 Admin Dashboard"):
        if st.text_input("Admin Pass", type="password") == cs.get_setting("ADMIN_PASS", "admin"):
            st.dataframe(load_logs())

# ==========================================
# STAGE 1: ORDER LOOKUP
# ==========================================
if st.session_state.stage == "lookup":
    st.title(f"📄 {cs.APP_TITLE}")

    with st.form("lookup"):
        order_number = st.text_input(cs.ORDER_NUMBER_LABEL, placeholder=cs.ORDER_NUMBER_PLACEHOLDER)
        confirmation_code = st.text_input(cs.CONFIRMATION_CODE_LABEL)
        submitted = st.form_submit_button(cs.LOOKUP_BUTTON)

    if submitted:
        problem = run_validators([ORDER_NUMBER], order_number)
        if problem:
            st.error(problem)
        elif not confirmation_code.strip():
            st.error("Código de confirmación es requerido")
        else:
            with st.spinner("Buscando pedido..."):
                found = shop.lookup_order(order_number, confirmation_code)
                processed = shop.check_order_processed(order_number, confirmation_code)

            if not found["success"] or not found.get("data"):
                st.error(found["message"] or "Pedido no encontrado")
            else:
                order = found["data"]
                st.session_state.processed = processed.get("isProcessed")
                if processed.get("allowBypass"):
                    order["id"] = BYPASS_ORDER_ID
                st.session_state.order = order
                st.session_state.stage = "review_order"
                st.rerun()

# ==========================================
# STAGE 2: ORDER STATUS
# ==========================================
elif st.session_state.stage == "review_order":
    order = st.session_state.order
    processed = st.session_state.processed
    is_bypass = order.get("id") == BYPASS_ORDER_ID

    st.title(f"Pedido #{order.get('orderNumber')}")
    st.write(f"**Fecha:** {order.get('date', '')}")

    if processed and not is_bypass:
        st.warning(cs.PROCESSED_ORDER_MSG.format(
            date=processed.get("processedDate", ""), email=processed.get("emailAddress", "")))
        st.markdown(f"{cs.DISAGREEMENT_SUGGESTION} {cs.CONTACT_URL}")
    elif order.get("status") not in ("paid", "completed") and not is_bypass:
        st.error(cs.UNPAID_ORDER_MSG)
        st.markdown(f"{cs.UNPAID_ORDER_SUGGESTION} {cs.CONTACT_URL}")
    elif is_bypass:
        st.info(f"**{cs.BYPASS_TITLE}** {cs.BYPASS_MESSAGE}")
        chosen = st.selectbox("Documento", FORM_TYPES,
                              format_func=lambda t: FORM_LIBRARY[t]["title"])
        if st.button("Continuar ➡️"):
            start_form(chosen)
            st.rerun()
    else:
        title = (order.get("items") or [{}])[0].get("title", "")
        form_type = get_form_type(title)
        st.success(f"Documento: {FORM_LIBRARY[form_type]['title']}")
        if st.button("Diligenciar ➡️"):
            start_form(form_type)
            st.rerun()

    if st.button("⬅️ Buscar otro pedido"):
        st.session_state.clear()
        st.rerun()

# ==========================================
# STAGE 3: FILL THE DOCUMENT
# ==========================================
elif st.session_state.stage == "form":
    form_type = st.session_state.form_type
    engine = build_engine(form_type)
    data = st.session_state.form_data

    st.title(f"✍️ {FORM_LIBRARY[form_type]['title']}")

    # Visibility is re-derived from the current answers on every rerun
    for field_id in engine.get_visible_fields(data):
        descriptor = engine.fields[field_id]
        label = descriptor.label
        if form_type == "transito" and field_id in ("actNumber", "actDate"):
            label = get_dynamic_label(field_id, data.get("procedureType", "")) or label
        required = engine.is_required(field_id, data)
        shown = descriptor if required == descriptor.required else descriptor.model_copy(
            update={"required": required})
        data[field_id] = render_field(shown, label, data.get(field_id))
        if field_id in st.session_state.errors:
            st.error(st.session_state.errors[field_id])

    st.divider()
    previous_email = (st.session_state.processed or {}).get("emailAddress")
    use_previous = bool(previous_email) and st.checkbox(cs.USE_PREVIOUS_EMAIL_LABEL)
    if use_previous:
        delivery_email = previous_email
    else:
        default_email = MOCK_DELIVERY_EMAIL if cs.is_enabled("AUTO_FILL_FORMS") else ""
        delivery_email = st.text_input(f"{DELIVERY_EMAIL_FIELD.label} *", value=default_email)
        if DELIVERY_EMAIL_FIELD.id in st.session_state.errors:
            st.error(st.session_state.errors[DELIVERY_EMAIL_FIELD.id])

    if st.session_state.errors:
        st.error(f"Revise los {len(st.session_state.errors)} campos marcados antes de enviar.")

    if st.button(f"🚀 {cs.SUBMIT_BUTTON}"):
        result = engine.validate(data)
        errors = dict(result.errors)
        if not use_previous:
            email_problem = run_validators(
                [lambda value: None if value.strip() else f"{DELIVERY_EMAIL_FIELD.label} es requerido.",
                 *DELIVERY_EMAIL_FIELD.validators],
                delivery_email,
            )
            if email_problem:
                errors[DELIVERY_EMAIL_FIELD.id] = email_problem
        st.session_state.errors = errors

        if errors:
            st.rerun()

        visible = set(engine.get_visible_fields(data))
        request = SubmitFormRequest(
            form_type=form_type,
            form_data={k: v for k, v in data.items() if k in visible},
            order_data=st.session_state.order,
            prompt_content=prepare_for_submission(
                data, st.session_state.prompt_files, ["procedureType"]),
            delivery_email=delivery_email,
            shop_name=st.session_state.shop_name,
        )
        with st.spinner(f"{cs.SUBMITTING_TITLE}... {cs.SUBMITTING_MESSAGE}"):
            response = submitter.submit_form(request)

        order_number = st.session_state.order.get("orderNumber", "")
        log.info("Order %s submitted: success=%s", order_number, response.success)
        log_submission(order_number, form_type, delivery_email,
                       "Success" if response.success else "Failed", response.message)
        st.session_state.result = response
        st.session_state.stage = "done"
        st.rerun()

# ==========================================
# STAGE 4: RESULT
# ==========================================
elif st.session_state.stage == "done":
    response = st.session_state.result
    if response.success:
        st.balloons()
        st.success("✅ Su solicitud fue enviada. Recibirá el documento en su correo.")
        if response.document_url:
            st.markdown(f"[Ver documento]({response.document_url})")
    else:
        st.error(response.message)
        if st.button("⬅️ Volver al formulario"):
            st.session_state.stage = "form"
            st.rerun()

    if st.button("Nuevo pedido"):
        st.session_state.clear()
        st.rerun()

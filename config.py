# config.py

from form_engine import ConditionalFormEngine, FieldDescriptor
import field_validators as v

TYPE_ID_OPTIONS = (
    ("CC", "Cédula de Ciudadanía"),
    ("CE", "Cédula de Extranjería"),
    ("TI", "Tarjeta de Identidad"),
    ("PA", "Pasaporte"),
)

PROCEDURE_TYPE_OPTIONS = (
    ("revocatoria-notificacion", "Revocatoria por indebida notificación"),
    ("revocatoria-identificacion", "Revocatoria por falta de identificación del conductor"),
    ("revocatoria-sast", "Revocatoria de fotomulta (SAST)"),
    ("caducidad-comparendo", "Caducidad del comparendo"),
    ("prescripcion-multa", "Prescripción de la multa"),
    ("prescripcion-coactivo", "Prescripción del cobro coactivo"),
    ("audiencia-virtual", "Solicitud de audiencia virtual"),
)

# -------------------------------------------------
# 🪪 SHARED APPLICANT FIELDS (first on every document)
# -------------------------------------------------
COMMON_FIELDS = {
    "userName": {"label": "Nombre completo", "required": True,
                 "placeholder": "Ej. María Elena García Rodríguez"},
    "typeId": {"label": "Tipo de documento", "required": True, "kind": "select",
               "options": TYPE_ID_OPTIONS},
    "idNumber": {"label": "Número de documento", "required": True,
                 "validators": (v.numeric, v.min_length(5))},
    "documentCity": {"label": "Ciudad de expedición del documento", "required": True},
    "documentDate": {"label": "Fecha de expedición del documento", "required": True,
                     "input_type": "date"},
}

FORM_LIBRARY = {
    # -------------------------------------------------
    # ⚖️ ACCIÓN DE TUTELA
    # -------------------------------------------------
    "tutela": {
        "title": "Acción de Tutela",
        "prompt_use_case": "tutela",
        "fields": {
            **COMMON_FIELDS,
            "email": {"label": "Correo electrónico", "required": True,
                      "input_type": "email", "validators": (v.EMAIL,)},
            "address": {"label": "Dirección de residencia", "required": True},
            "city": {"label": "Ciudad", "required": True},
            "state": {"label": "Departamento", "required": True},
            "phone": {"label": "Teléfono", "required": True, "input_type": "tel",
                      "validators": (v.PHONE,)},
            "guiltyParty": {"label": "Entidad o persona que vulnera sus derechos", "required": True},
            "facts": {"label": "Hechos", "required": True, "kind": "textarea",
                      "validators": (v.min_length(50),)},
            "expectation": {"label": "Lo que espera que el juez ordene", "required": True,
                            "kind": "textarea"},
            "protectedRights": {"label": "Derechos fundamentales vulnerados", "required": False,
                                "kind": "textarea"},
        },
        "conditional_fields": {},
    },
    # -------------------------------------------------
    # 📨 DERECHO DE PETICIÓN
    # -------------------------------------------------
    "peticion": {
        "title": "Derecho de Petición",
        "prompt_use_case": "peticion",
        "fields": {
            **COMMON_FIELDS,
            "city": {"label": "Ciudad donde se radica", "required": True},
            "date": {"label": "Fecha de la petición", "required": True, "input_type": "date"},
            "targetEntity": {"label": "Entidad destinataria", "required": True},
            "petitionRequest": {"label": "Solicitud", "required": True, "kind": "textarea"},
            "petitionReasons": {"label": "Razones de la petición", "required": True,
                                "kind": "textarea"},
            "responseAddress": {"label": "Dirección para respuesta", "required": False},
            "responseCity": {"label": "Ciudad para respuesta", "required": False},
            "responseEmail": {"label": "Correo para respuesta", "required": True,
                              "input_type": "email", "validators": (v.EMAIL,)},
        },
        "conditional_fields": {},
    },
    # -------------------------------------------------
    # 🚦 TRÁMITE DE TRÁNSITO (the only one with conditional fields)
    # -------------------------------------------------
    "transito": {
        "title": "Trámite de Tránsito",
        "prompt_use_case": "transito",
        "fields": {
            **COMMON_FIELDS,
            "notificationAddress": {"label": "Dirección de notificación", "required": True},
            "notificationCity": {"label": "Ciudad de notificación", "required": True},
            "notificationEmail": {"label": "Correo de notificación", "required": True,
                                  "input_type": "email", "validators": (v.EMAIL,)},
            "phoneNumber": {"label": "Teléfono", "required": True, "input_type": "tel",
                            "validators": (v.PHONE,)},
            "procedureType": {"label": "Tipo de trámite", "required": True, "kind": "select",
                              "options": PROCEDURE_TYPE_OPTIONS},
            "actNumber": {"label": "Número del acto", "required": True},
            "actDate": {"label": "Fecha del acto", "required": True, "input_type": "date"},
            "infractionCode": {"label": "Código de la infracción", "required": False},
            "infractionDescription": {"label": "Descripción de la infracción", "required": False,
                                      "kind": "textarea"},
            "vehicleBrand": {"label": "Marca del vehículo", "required": True},
            "vehicleModel": {"label": "Modelo del vehículo", "required": True},
            "vehiclePlates": {"label": "Placas del vehículo", "required": True},
            "isOwner": {"label": "¿Es propietario del vehículo?", "required": True,
                        "kind": "select", "options": (("si", "Sí"), ("no", "No"))},
            "mobilitySecretaryName": {"label": "Secretaría de movilidad", "required": True},
            "petitionDate": {"label": "Fecha de la solicitud", "required": True,
                             "input_type": "date"},
            "virtualAudienceReason": {
                "label": "Razón para solicitar audiencia virtual",
                "required": False,
                "kind": "textarea",
                "validators": (v.min_length(10),),
            },
        },
        # Shown AND required only for virtual hearings; both rules are explicit.
        "conditional_fields": {
            "virtualAudienceReason": [
                {"dependsOn": "procedureType", "when": "audiencia-virtual", "type": "show"},
                {"dependsOn": "procedureType", "when": "audiencia-virtual", "type": "require"},
            ],
        },
    },
}

FORM_TYPES = tuple(FORM_LIBRARY.keys())

# Footer field shared by all documents
DELIVERY_EMAIL_FIELD = FieldDescriptor(
    id="deliveryEmail",
    label="Correo de entrega del documento",
    required=True,
    input_type="email",
    validators=(v.email,),
)

# Built once at import so authoring mistakes fail immediately
ENGINES = {
    form_type: ConditionalFormEngine(spec["fields"], spec["conditional_fields"])
    for form_type, spec in FORM_LIBRARY.items()
}


def build_engine(form_type):
    if form_type not in ENGINES:
        raise KeyError(f"Unknown form type: {form_type}")
    return ENGINES[form_type]


def get_form_type(order_title):
    """Pick the document type from the purchased product's title."""
    title = (order_title or "").lower()
    if "tutela" in title:
        return "tutela"
    if "petición" in title or "peticion" in title:
        return "peticion"
    if "tránsito" in title or "transito" in title:
        return "transito"
    return "tutela"


def create_initial_form_data(form_type):
    engine = build_engine(form_type)
    return {
        field_id: [] if descriptor.kind == "multiselect" else ""
        for field_id, descriptor in engine.fields.items()
    }


def get_dynamic_label(field_id, procedure_type):
    """Labels of the tránsito act fields depend on the procedure type."""
    comparendo = ("revocatoria-notificacion", "revocatoria-identificacion",
                  "revocatoria-sast", "caducidad-comparendo")
    resolucion = ("prescripcion-multa", "prescripcion-coactivo")

    if field_id == "actNumber":
        if procedure_type in comparendo:
            return "Número de Comparendo"
        if procedure_type in resolucion:
            return "Número de Resolución"
        if procedure_type == "audiencia-virtual":
            return "Número de Comparendo o Resolución"
        return "Número de Identificación del Acto"

    if field_id == "actDate":
        if procedure_type in comparendo:
            return "Fecha de la Infracción"
        if procedure_type in resolucion:
            return "Fecha de la Resolución"
        return "Fecha del Acto"

    return ""

# Sample answers used to auto-fill forms in development (AUTO_FILL_FORMS=true)

MOCK_FORM_DATA = {
    "tutela": {
        "userName": "María Elena García Rodríguez",
        "typeId": "CC",
        "idNumber": "52987654",
        "documentCity": "Bogotá",
        "documentDate": "2010-03-15",
        "email": "maria.garcia@example.com",
        "address": "Carrera 15 #45-67, Apartamento 302",
        "city": "Bogotá",
        "state": "Cundinamarca",
        "phone": "3012345678",
        "guiltyParty": "Ministerio de Salud y Protección Social",
        "facts": (
            "El día 15 de julio de 2024 solicité autorización para un procedimiento médico "
            "urgente a través de mi EPS, pero hasta la fecha no he recibido respuesta alguna."
        ),
        "expectation": (
            "Que se ordene a la entidad autorizar de manera inmediata el procedimiento médico "
            "requerido, garantizando mi derecho fundamental a la salud."
        ),
        "protectedRights": "Derecho a la salud (art. 49 C.P.) y a la vida digna (art. 11 C.P.).",
    },
    "peticion": {
        "userName": "Carlos Alberto Méndez López",
        "typeId": "CC",
        "idNumber": "98765432",
        "documentCity": "Medellín",
        "documentDate": "2005-06-20",
        "city": "Medellín",
        "date": "2025-08-28",
        "targetEntity": "Alcaldía de Medellín - Secretaría de Infraestructura",
        "petitionRequest": (
            "Solicito información sobre el estado del proyecto del puente peatonal de la "
            "Carrera 80 con Calle 65: cronograma, presupuesto y contratista."
        ),
        "petitionReasons": (
            "Como residente del sector necesito conocer el avance de una obra financiada con "
            "recursos públicos que afecta la movilidad de la comunidad."
        ),
        "responseAddress": "Carrera 80 #65-45, Barrio Robledo",
        "responseCity": "Medellín",
        "responseEmail": "carlos.mendez@example.com",
    },
    "transito": {
        "userName": "Ana Carolina Fernández Silva",
        "typeId": "CC",
        "idNumber": "52123456",
        "documentCity": "Barranquilla",
        "documentDate": "2012-11-02",
        "notificationAddress": "Calle 26 #47-89, Torre B, Apartamento 1205",
        "notificationCity": "Barranquilla",
        "notificationEmail": "ana.fernandez@example.com",
        "phoneNumber": "3155551234",
        "procedureType": "",  # picked from the reference documents
        "actNumber": "MOV-2024-001234",
        "actDate": "2024-08-15",
        "infractionCode": "C14",
        "infractionDescription": "Conducir vehículo con pico y placa",
        "vehicleBrand": "Chevrolet",
        "vehicleModel": "Spark GT",
        "vehiclePlates": "DEF456",
        "isOwner": "si",
        "mobilitySecretaryName": "Secretaría de Tránsito y Transporte de Barranquilla",
        "petitionDate": "2024-08-20",
        "virtualAudienceReason": (
            "Por motivos de trabajo no puedo asistir presencialmente a la audiencia."
        ),
    },
}

MOCK_DELIVERY_EMAIL = "entregas@example.com"


def get_mock_data(form_type):
    data = MOCK_FORM_DATA.get(form_type)
    return dict(data) if data is not None else None


def auto_fill(form_type, form_data, enabled):
    """Returns form_data overlaid with sample answers when enabled."""
    if not enabled:
        return form_data
    mock = get_mock_data(form_type)
    if mock is None:
        return form_data
    return {**form_data, **mock}

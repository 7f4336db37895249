# field_validators.py
# Reusable value checks for form fields. Each validator takes the field value
# and returns an error message, or None when the value passes.

import re

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]+$")


def _as_text(value):
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def _selections(value):
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if str(v).strip()]
    text = _as_text(value)
    return [v for v in text.split(",") if v.strip()] if text else []


def _plural(n):
    return "opción" if n == 1 else "opciones"


def required(value):
    if isinstance(value, (list, tuple)):
        return None if value else "Este campo es requerido"
    if not _as_text(value).strip():
        return "Este campo es requerido"
    return None


def min_length(n):
    def check(value):
        text = _as_text(value)
        if not text:
            return None  # empty values are the required check's job
        return None if len(text) >= n else f"Debe tener al menos {n} caracteres"
    return check


def max_length(n):
    def check(value):
        text = _as_text(value)
        if not text:
            return None
        return None if len(text) <= n else f"No puede tener más de {n} caracteres"
    return check


def pattern(regex, message):
    compiled = re.compile(regex) if isinstance(regex, str) else regex

    def check(value):
        text = _as_text(value)
        if not text:
            return None
        return None if compiled.search(text) else message
    return check


def email(value):
    text = _as_text(value).strip()
    if not text:
        return None
    return None if EMAIL_RE.match(text) else "Email inválido"


def numeric(value):
    text = _as_text(value).strip()
    if not text:
        return None
    return None if text.isdigit() else "Solo se permiten números"


def _number_bound(bound, ok, message):
    def check(value):
        text = _as_text(value).strip()
        if not text:
            return None
        try:
            num = int(text)
        except ValueError:
            return "Solo se permiten números"
        return None if ok(num, bound) else message
    return check


def min_number(n):
    return _number_bound(n, lambda num, b: num >= b, f"Debe ser al menos {n}")


def max_number(n):
    return _number_bound(n, lambda num, b: num <= b, f"No puede ser mayor a {n}")


def min_selections(n):
    def check(value):
        if len(_selections(value)) >= n:
            return None
        return f"Debe seleccionar al menos {n} {_plural(n)}"
    return check


def max_selections(n):
    def check(value):
        if len(_selections(value)) <= n:
            return None
        return f"No puede seleccionar más de {n} {_plural(n)}"
    return check


def exact_selections(n):
    def check(value):
        if len(_selections(value)) == n:
            return None
        return f"Debe seleccionar exactamente {n} {_plural(n)}"
    return check


def allowed_values(allowed):
    allowed = list(allowed)

    def check(value):
        invalid = [v for v in _selections(value) if v not in allowed]
        if not invalid:
            return None
        return f"Valores no permitidos: {', '.join(invalid)}"
    return check


def combine_validators(*checks):
    """Run checks in order; the first message wins."""
    def check(value):
        for validator in checks:
            message = validator(value)
            if message:
                return message
        return None
    return check


def run_validators(checks, value):
    return combine_validators(*checks)(value)


# --- COMMON COMBINATIONS ---
ORDER_NUMBER = combine_validators(required, numeric, min_length(4))
EMAIL = combine_validators(required, email)
PHONE = combine_validators(required, pattern(PHONE_RE, "Formato de teléfono inválido"))

import pytest

import field_validators as v


def test_required():
    assert v.required("") == "Este campo es requerido"
    assert v.required("  ") == "Este campo es requerido"
    assert v.required([]) == "Este campo es requerido"
    assert v.required("x") is None
    assert v.required(["x"]) is None


def test_length_checks_skip_empty():
    assert v.min_length(4)("") is None
    assert v.min_length(4)("abc") == "Debe tener al menos 4 caracteres"
    assert v.min_length(4)("abcd") is None
    assert v.max_length(3)("abcd") == "No puede tener más de 3 caracteres"


@pytest.mark.parametrize("value,ok", [
    ("ana@example.com", True),
    ("ana@example", False),
    ("ana example.com", False),
    ("", True),
])
def test_email(value, ok):
    assert (v.email(value) is None) is ok


def test_numeric_and_bounds():
    assert v.numeric("1234") is None
    assert v.numeric("12a") == "Solo se permiten números"
    assert v.min_number(5)("3") == "Debe ser al menos 5"
    assert v.max_number(5)("9") == "No puede ser mayor a 5"
    assert v.max_number(5)("abc") == "Solo se permiten números"


def test_pattern():
    check = v.pattern(v.PHONE_RE, "Formato de teléfono inválido")
    assert check("+57 301 234-5678") is None
    assert check("llámame") == "Formato de teléfono inválido"


def test_selection_counts_on_lists_and_strings():
    assert v.min_selections(1)([]) == "Debe seleccionar al menos 1 opción"
    assert v.min_selections(2)("a") == "Debe seleccionar al menos 2 opciones"
    assert v.max_selections(1)(["a", "b"]) == "No puede seleccionar más de 1 opción"
    assert v.exact_selections(2)("a,b") is None


def test_allowed_values():
    check = v.allowed_values(["salud", "vida"])
    assert check(["salud"]) is None
    assert check(["salud", "otro"]) == "Valores no permitidos: otro"


def test_combine_first_message_wins():
    assert v.ORDER_NUMBER("") == "Este campo es requerido"
    assert v.ORDER_NUMBER("12a4") == "Solo se permiten números"
    assert v.ORDER_NUMBER("123") == "Debe tener al menos 4 caracteres"
    assert v.ORDER_NUMBER("1042") is None


def test_contact_combinations():
    assert v.EMAIL("") == "Este campo es requerido"
    assert v.EMAIL("ana@") == "Email inválido"
    assert v.EMAIL("ana@example.com") is None
    assert v.PHONE("llámame") == "Formato de teléfono inválido"
    assert v.PHONE("+57 301 234-5678") is None


def test_run_validators_with_no_checks():
    assert v.run_validators((), "anything") is None

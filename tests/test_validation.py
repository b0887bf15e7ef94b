from app.api.clients.models import ClientCreate, ClientUpdate
from app.api.expenses.models import ExpenseCreate, ExpenseUpdate
from app.api.payments.models import PaymentConfirm, PaymentHistoryCreate
from app.api.projects.models import ProjectCreate, ProjectReorder, ProjectUpdate
from app.schemas.validation import field_errors, validate_payload


def _fields(result) -> set:
    return {error["field"] for error in result.errors}


def test_client_create_valid_defaults_status(sample_client_payload) -> None:
    result = validate_payload(ClientCreate, sample_client_payload)

    assert result.ok
    assert result.value["companyName"] == "Padaria Central"
    assert result.value["paymentStatus"] == "Pendente"


def test_client_create_trims_and_rejects_blank_name(sample_client_payload) -> None:
    trimmed = validate_payload(ClientCreate, {**sample_client_payload, "companyName": "  Padaria  "})
    blank = validate_payload(ClientCreate, {**sample_client_payload, "companyName": "   "})

    assert trimmed.value["companyName"] == "Padaria"
    assert not blank.ok
    assert "companyName" in _fields(blank)


def test_client_create_rejects_out_of_range_values(sample_client_payload) -> None:
    result = validate_payload(
        ClientCreate,
        {**sample_client_payload, "monthlyValue": 0, "dueDay": 32, "paymentStatus": "Quitado"},
    )

    assert _fields(result) == {"monthlyValue", "dueDay", "paymentStatus"}


def test_client_create_website_link(sample_client_payload) -> None:
    blank = validate_payload(ClientCreate, {**sample_client_payload, "websiteLink": "  "})
    invalid = validate_payload(ClientCreate, {**sample_client_payload, "websiteLink": "not a url"})

    assert blank.value["websiteLink"] is None
    assert _fields(invalid) == {"websiteLink"}
    assert invalid.errors[0]["message"] == "deve ser uma URL válida"


def test_client_create_missing_required_fields() -> None:
    result = validate_payload(ClientCreate, {})

    assert _fields(result) == {"companyName", "monthlyValue", "dueDay"}


def test_client_update_only_keeps_supplied_fields() -> None:
    result = validate_payload(ClientUpdate, {"dueDay": 15}, partial=True)

    assert result.value == {"dueDay": 15}


def test_client_update_rejects_explicit_null_on_required_column() -> None:
    result = validate_payload(ClientUpdate, {"companyName": None}, partial=True)
    nullable = validate_payload(ClientUpdate, {"websiteLink": None}, partial=True)

    assert _fields(result) == {"companyName"}
    assert nullable.value == {"websiteLink": None}


def test_expense_create_blank_optionals_become_null(sample_expense_payload) -> None:
    result = validate_payload(ExpenseCreate, {**sample_expense_payload, "frequency": "", "dueDate": ""})

    assert result.ok
    assert result.value["frequency"] is None
    assert result.value["dueDate"] is None
    assert result.value["status"] == "Pendente"


def test_expense_create_rejects_bad_date_and_frequency(sample_expense_payload) -> None:
    result = validate_payload(
        ExpenseCreate,
        {**sample_expense_payload, "date": "2026-02-30", "frequency": "Semanal"},
    )

    assert _fields(result) == {"date", "frequency"}


def test_expense_update_empty_payload_is_valid_but_empty() -> None:
    result = validate_payload(ExpenseUpdate, {}, partial=True)

    assert result.ok
    assert result.value == {}


def test_project_create_defaults_order(sample_project_payload) -> None:
    result = validate_payload(ProjectCreate, sample_project_payload)

    assert result.value["order"] == 0


def test_project_create_accepts_uploaded_image_path(sample_project_payload) -> None:
    result = validate_payload(
        ProjectCreate, {**sample_project_payload, "image": "/uploads/projects/project-abc.png", "link": ""}
    )

    assert result.ok
    assert result.value["link"] is None


def test_project_update_rejects_negative_order() -> None:
    result = validate_payload(ProjectUpdate, {"order": -1}, partial=True)

    assert _fields(result) == {"order"}


def test_project_reorder_requires_items() -> None:
    empty = validate_payload(ProjectReorder, {"projects": []})
    valid = validate_payload(ProjectReorder, {"projects": [{"id": 2, "order": 0}, {"id": 1, "order": 1}]})

    assert not empty.ok
    assert valid.value == {"projects": [{"id": 2, "order": 0}, {"id": 1, "order": 1}]}


def test_payment_confirm_requires_positive_amount() -> None:
    result = validate_payload(PaymentConfirm, {"amountReceived": -5, "paymentDate": "2026-03-10"})

    assert _fields(result) == {"amountReceived"}


def test_payment_history_create_defaults_to_paid() -> None:
    result = validate_payload(
        PaymentHistoryCreate,
        {"clientId": 1, "amountReceived": 100, "paymentDate": "2026-03-10", "observations": " "},
    )

    assert result.value["status"] == "Pago"
    assert result.value["observations"] is None


def test_field_errors_flattens_locations() -> None:
    errors = field_errors(
        [
            {"loc": ("body", "companyName"), "msg": "Field required", "type": "missing"},
            {"loc": ("body",), "msg": "Value error, boom", "type": "value_error"},
        ]
    )

    assert errors == [
        {"field": "companyName", "message": "Field required"},
        {"field": "body", "message": "boom"},
    ]


def test_due_day_boundaries(sample_client_payload) -> None:
    for day in (1, 31):
        assert validate_payload(ClientCreate, {**sample_client_payload, "dueDay": day}).ok
    for day in (0, 32, -1):
        assert not validate_payload(ClientCreate, {**sample_client_payload, "dueDay": day}).ok


def test_expense_category_has_no_length_cap(sample_expense_payload) -> None:
    long_category = validate_payload(ExpenseCreate, {**sample_expense_payload, "category": "x" * 150})
    blank_category = validate_payload(ExpenseCreate, {**sample_expense_payload, "category": "   "})
    update = validate_payload(ExpenseUpdate, {"category": "y" * 300}, partial=True)

    assert long_category.ok
    assert long_category.value["category"] == "x" * 150
    assert _fields(blank_category) == {"category"}
    assert update.ok

import math

from dea.form222 import chunk_items, generate_forms, item_name, mask_dea_number, validate_form
from models.forms import ControlledLineItem, FormLineItem, FormStatus, RegistrantInfo, RegulatedForm


def _form(dea="AB1234567", lines=None, fixed=None):
    if lines is None:
        lines = [FormLineItem(line_number=1, number_of_packages=2, size_of_package="100", ndc="00406-8001-01", name_of_item="Oxycodone 5 mg Tablet")]
    return RegulatedForm(
        form_number="X-1-1",
        registrant_info=RegistrantInfo(name="HealthCare Pharmacy", dea_number=dea),
        line_items=lines,
        total_lines=len(lines),
        date_executed=fixed,
    )


def test_chunk_items_keeps_order():
    assert chunk_items(list(range(23)), 10) == [list(range(10)), list(range(10, 20)), [20, 21, 22]]
    assert chunk_items([], 10) == []


def test_generate_forms_empty():
    from models.forms import Registrant
    assert generate_forms(Registrant(dea_number="AB1234567"), []) == []


def test_generate_forms_count_and_order(registrant, fixed_now, make_items):
    for n in (1, 9, 10, 11, 20, 21, 37):
        items = make_items(n)
        forms = generate_forms(registrant, items, now=fixed_now)
        assert len(forms) == math.ceil(n / 10)
        flat = [li for f in forms for li in f.line_items]
        assert [li.ndc for li in flat] == [i.ndc for i in items]
        assert [li.number_of_packages for li in flat] == [i.quantity for i in items]


def test_fifteen_items_make_two_valid_forms(registrant, fixed_now, make_items):
    forms = generate_forms(registrant, make_items(15), now=fixed_now)
    assert [f.total_lines for f in forms] == [10, 5]
    assert [len(f.line_items) for f in forms] == [10, 5]
    assert [li.line_number for li in forms[1].line_items] == [1, 2, 3, 4, 5]
    for f in forms:
        assert validate_form(f) == []
        assert f.status == FormStatus.DRAFT
        assert f.date_executed == fixed_now
        assert f.registrant_info.name == "HealthCare Pharmacy"
        assert f.registrant_info.address == "123 Main Street"
        assert f.registrant_info.zip == "62701"


def test_form_numbers_share_timestamp_and_count_up(registrant, fixed_now, make_items):
    forms = generate_forms(registrant, make_items(25), now=fixed_now)
    ms = int(fixed_now.timestamp() * 1000)
    assert [f.form_number for f in forms] == [f"AB1234567-{ms}-1", f"AB1234567-{ms}-2", f"AB1234567-{ms}-3"]


def test_line_item_fields(registrant, fixed_now):
    items = [
        ControlledLineItem(ndc="00406-8001-01", product_name="Percocet", strength="5/325 mg", dosage_form="Tablet", quantity=3, package_size=30),
        ControlledLineItem(ndc="00406-8002-01", non_proprietary_name="Morphine Sulfate", quantity=1),
    ]
    first, second = generate_forms(registrant, items, now=fixed_now)[0].line_items
    assert first.name_of_item == "Percocet 5/325 mg Tablet"
    assert first.size_of_package == "30"
    assert second.name_of_item == "Morphine Sulfate"
    assert second.size_of_package == "100"
    assert second.date_received is None
    assert second.packages_received is None


def test_item_name_prefers_non_proprietary_name():
    item = ControlledLineItem(non_proprietary_name="Fentanyl", product_name="Duragesic", strength="25 mcg/hr", dosage_form="Patch")
    assert item_name(item) == "Fentanyl 25 mcg/hr Patch"


def test_forms_do_not_share_registrant_objects(registrant, fixed_now, make_items):
    a, b = generate_forms(registrant, make_items(11), now=fixed_now)
    assert a.registrant_info == b.registrant_info
    assert a.registrant_info is not b.registrant_info


def test_validate_form_valid(fixed_now):
    assert validate_form(_form(fixed=fixed_now)) == []


def test_validate_form_bad_dea_format(fixed_now):
    errors = validate_form(_form(dea="123456789", fixed=fixed_now))
    assert any("DEA number format" in e for e in errors)
    assert "DEA number is required" not in errors


def test_validate_form_empty_dea_reports_both(fixed_now):
    errors = validate_form(_form(dea="", fixed=fixed_now))
    assert errors[:2] == [
        "DEA number is required",
        "Invalid DEA number format (should be 2 letters + 7 digits)",
    ]


def test_validate_form_lowercase_dea_rejected(fixed_now):
    assert validate_form(_form(dea="ab1234567", fixed=fixed_now)) == [
        "Invalid DEA number format (should be 2 letters + 7 digits)"
    ]


def test_validate_form_no_lines(fixed_now):
    assert validate_form(_form(lines=[], fixed=fixed_now)) == ["At least one line item is required"]


def test_validate_form_too_many_lines(fixed_now):
    lines = [
        FormLineItem(line_number=i + 1, number_of_packages=1, size_of_package="100", ndc="00406-8001-01", name_of_item="X")
        for i in range(11)
    ]
    errors = validate_form(_form(lines=lines, fixed=fixed_now))
    assert errors == ["Maximum 10 line items per form"]


def test_validate_form_line_errors_collected(fixed_now):
    lines = [
        FormLineItem(line_number=1, number_of_packages=1, size_of_package="100", ndc="00406-8001-01", name_of_item="A"),
        FormLineItem(line_number=2, number_of_packages=0, size_of_package="100", ndc="", name_of_item=""),
    ]
    assert validate_form(_form(lines=lines, fixed=fixed_now)) == [
        "Line 2: NDC is required",
        "Line 2: Item name is required",
        "Line 2: Quantity must be greater than 0",
    ]


def test_generated_form_with_zero_quantity_is_flagged(registrant, fixed_now):
    items = [ControlledLineItem(ndc="00406-8001-01", product_name="Oxycodone", quantity=0)]
    form = generate_forms(registrant, items, now=fixed_now)[0]
    assert validate_form(form) == ["Line 1: Quantity must be greater than 0"]


def test_mask_dea_number():
    assert mask_dea_number("AB1234567") == "AB*******"
    assert mask_dea_number("") == ""


def test_status_lifecycle_order():
    assert [s.value for s in FormStatus.lifecycle()] == ["DRAFT", "PENDING", "SUBMITTED", "COMPLETED"]


def test_fractional_quantity_is_kept(registrant, fixed_now):
    items = [ControlledLineItem(ndc="00406-8001-01", product_name="Oxycodone", quantity=1.5)]
    form = generate_forms(registrant, items, now=fixed_now)[0]
    assert form.line_items[0].number_of_packages == 1.5
    assert validate_form(form) == []

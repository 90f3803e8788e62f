from datetime import datetime, timezone

import pytest

from models.forms import Address, ControlledLineItem, Registrant, RegistrantAddresses


@pytest.fixture
def registrant():
    return Registrant(
        business_name="HealthCare Pharmacy",
        dea_number="AB1234567",
        addresses=RegistrantAddresses(
            registered=Address(street="123 Main Street", city="Springfield", state="IL", zip="62701"),
        ),
    )


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_items():
    return _make_items


def _make_items(n):
    return [
        ControlledLineItem(
            ndc=f"00406-{8000 + i:04d}-01",
            non_proprietary_name="Oxycodone Hydrochloride",
            strength="5 mg",
            dosage_form="Tablet",
            quantity=i + 1,
        )
        for i in range(n)
    ]

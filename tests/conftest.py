# -*- coding: utf-8 -*-
"""
Shared fixtures for the registration change tests.

Backend payloads use the wire format of the change-context endpoint;
FakeApiClient stands in for RegistrationChangeApiClient.
"""

import os

# Run Qt headless so the suite works without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from controllers.registration_change_controller import RegistrationChangeController
from models.registration import InitData
from ui.wizards.registration_change.change_context import RegistrationChangeContext

REGISTRANT_ID = "a0B5e000001AbCdEAK"
CURRENT_PROGRAM_ID = "a0P5e000000PrgAAA"
OTHER_PROGRAM_ID = "a0P5e000000PrgBBB"
NO_FEE_PROGRAM_ID = "a0P5e000000PrgCCC"
ORIGINAL_RECORD_ID = "0065e00000OppAAAQ"
ACCOUNT_ID = "0015e00000AccAAAQ"
PRICING_CONTEXT_ID = "01s5e00000PbkAAAQ"

PROGRAMS = [
    {
        "id": CURRENT_PROGRAM_ID,
        "name": "Spring Leadership Summit",
        "code": "SLS-24",
        "acronym": "SLS",
        "startDate": "2024-04-12",
        "expectedProgramFee": "450.00",
    },
    {
        "id": OTHER_PROGRAM_ID,
        "name": "Fall Finance Forum",
        "code": "FFF-24",
        "acronym": "FFF",
        "startDate": "2024-10-03",
        "expectedProgramFee": "600.00",
    },
    {
        "id": NO_FEE_PROGRAM_ID,
        "name": "Winter Data Workshop",
        "code": "WDW-25",
        "acronym": "WDW",
        "startDate": "2025-01-20",
        "expectedProgramFee": None,
    },
]

CONTACTS = [
    {"id": "0035e00000CntAAAQ", "name": "John Smith", "email": "john.smith@example.org", "accountName": "Acme"},
    {"id": "0035e00000CntBBBQ", "name": "Johanna Lee", "email": "j.lee@example.org", "accountName": "Acme"},
]


def make_init_payload(
    payment_status="Paid",
    is_bundled="No",
    amount="1000.00",
    original_fee_total="800.00",
    discount_total="0",
    loaded_registrant_id=REGISTRANT_ID,
):
    """Change-context response as the backend sends it."""
    return {
        "registrant": {
            "id": loaded_registrant_id,
            "firstName": "Jane",
            "lastName": "Doe",
            "name": "A-000123",
            "programId": CURRENT_PROGRAM_ID,
            "programName": "Spring Leadership Summit",
        },
        "originatingFinancialRecord": {
            "id": ORIGINAL_RECORD_ID,
            "name": "Jane Doe - Spring Leadership Summit",
            "amount": amount,
            "balance": "0",
            "paymentStatus": payment_status,
            "isBundled": is_bundled,
            "discountAmount": discount_total,
            "accountId": ACCOUNT_ID,
            "pricingContextId": PRICING_CONTEXT_ID,
        },
        "availablePrograms": PROGRAMS,
        "originalProgramFeeTotal": original_fee_total,
        "discountTotal": discount_total,
    }


class FakeApiClient:
    """
    Records every call and answers from a script.

    Usage:
        api = FakeApiClient()
        api.respond("execute_transfer", {"success": True})
        api.fail("search_contacts", NetworkException("timed out"))
    """

    def __init__(self):
        self.calls = []
        self._responses = {
            "get_change_context": make_init_payload(),
            "get_program_details": {"expectedProgramFee": "600.00", "transferFeeUnitPrice": "75.00"},
            "search_contacts": CONTACTS,
            "execute_transfer": {"success": True, "newOpportunityId": "0065e00000OppNEWQ",
                                 "newAttendeeId": "a0B5e000001NewAAA"},
            "execute_cancellation": {"success": True, "opportunityId": ORIGINAL_RECORD_ID,
                                     "paymentId": "a0X5e000000PayAAA", "refundAmount": 950},
            "execute_substitution": {"success": True, "newOpportunityId": "0065e00000OppSUBQ",
                                     "newAttendeeId": "a0B5e000001SubAAA"},
        }
        self._errors = {}
        self.on_call = None

    def respond(self, method, response):
        self._responses[method] = response
        self._errors.pop(method, None)

    def fail(self, method, error):
        self._errors[method] = error

    def calls_to(self, method):
        return [args for name, args in self.calls if name == method]

    def _call(self, method, *args):
        self.calls.append((method, args))
        if self.on_call:
            self.on_call(method)
        if method in self._errors:
            raise self._errors[method]
        return self._responses.get(method)

    def get_change_context(self, registrant_id):
        return self._call("get_change_context", registrant_id)

    def get_program_details(self, program_id, pricing_context_id=None):
        return self._call("get_program_details", program_id, pricing_context_id)

    def search_contacts(self, term, account_id=None):
        return self._call("search_contacts", term, account_id)

    def execute_transfer(self, payload):
        return self._call("execute_transfer", payload)

    def execute_cancellation(self, payload):
        return self._call("execute_cancellation", payload)

    def execute_substitution(self, payload):
        return self._call("execute_substitution", payload)


class SignalRecorder:
    """Collects emissions of a Qt signal."""

    def __init__(self, signal):
        self.emissions = []
        signal.connect(self._record)

    def _record(self, *args):
        self.emissions.append(args)

    @property
    def last(self):
        return self.emissions[-1] if self.emissions else None

    def __len__(self):
        return len(self.emissions)


@pytest.fixture
def fake_api():
    """Scriptable backend."""
    return FakeApiClient()


@pytest.fixture
def make_context():
    """Build a loaded context from payload overrides."""
    def _make(registrant_id=REGISTRANT_ID, **payload):
        context = RegistrationChangeContext(registrant_id)
        context.init_data = InitData.from_dict(make_init_payload(**payload))
        return context
    return _make


@pytest.fixture
def context(make_context):
    """Loaded context of a fully paid, unbundled registration."""
    return make_context()


@pytest.fixture
def make_controller(qapp, fake_api):
    """Build a controller and load its init data from payload overrides."""
    def _make(registrant_id=REGISTRANT_ID, **payload):
        if payload:
            fake_api.respond("get_change_context", make_init_payload(**payload))
        controller = RegistrationChangeController(registrant_id, api_client=fake_api)
        controller.load_init_data()
        return controller
    return _make


@pytest.fixture
def controller(make_controller):
    """Loaded controller for a fully paid, unbundled registration."""
    return make_controller()


@pytest.fixture
def notifications(controller):
    """Notifications emitted by the default controller."""
    return SignalRecorder(controller.notification)


@pytest.fixture
def record_signal():
    """Factory: ``record_signal(obj.some_signal)`` returns a SignalRecorder."""
    return SignalRecorder


@pytest.fixture
def init_payload():
    """Factory for change-context payloads."""
    return make_init_payload

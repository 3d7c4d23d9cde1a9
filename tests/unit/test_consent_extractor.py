"""
Consent extractor unit tests
"""

import pytest

from consentrelay.application.parsing import extract_consent
from consentrelay.domain import ConsentStatus


class TestExtractConsent:
    def test_active(self):
        record = extract_consent(
            {"consent": {"id": "TESTID1234", "patient": "TESTPATIENT1234", "status": "active"}}
        ).unwrap()
        assert record.status is ConsentStatus.ACTIVE
        assert record.is_active is True
        assert record.subject_id == "TESTPATIENT1234"

    def test_rejected(self):
        record = extract_consent({"consent": {"patient": "TESTPATIENT1234", "status": "rejected"}}).unwrap()
        assert record.status is ConsentStatus.REJECTED
        assert record.is_active is False

    def test_ignores_rest_of_mtb_file(self):
        payload = {
            "patient": {"id": "TESTPATIENT1234", "gender": "female"},
            "episode": {"id": "E1"},
            "consent": {"patient": "TESTPATIENT1234", "status": "active", "extra": True},
        }
        assert extract_consent(payload).is_ok()

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"consent": None},
            {"consent": {"status": "active"}},
            {"consent": {"patient": "p1"}},
            {"consent": {"status": "Active", "patient": "p1"}},
            {"consent": {"status": "withdrawn", "patient": "p1"}},
            {"consent": {"status": "active", "patient": 1234}},
            {"consent": {"status": "active", "patient": ""}},
            [],
            "consent",
            None,
        ],
    )
    def test_invalid_consent_fails(self, payload):
        result = extract_consent(payload)
        assert result.is_ok() is False
        assert result.error().code == "MALFORMED"

    def test_missing_consent_is_not_a_rejection(self):
        result = extract_consent({"patient": "p1"})
        assert result.unwrap_or(None) is None

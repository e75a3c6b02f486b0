import unittest

from schemas.registration import FullRegistrationIn
from utils.form_fields import RequestBody, _flatten, candidate_keys


class TestFormFieldLookup(unittest.TestCase):
    def test_candidate_keys_order(self):
        self.assertEqual(
            candidate_keys("full_name", "personal"),
            ["personal[full_name]", "personal_full_name", "full_name"],
        )
        self.assertEqual(candidate_keys("email"), ["email"])

    def test_nested_wins_over_flat_and_bare(self):
        body = RequestBody(values={
            "full_name": "Bare",
            "personal_full_name": "Flat",
            "personal[full_name]": "Nested",
        })
        self.assertEqual(body.get("full_name", "personal"), "Nested")

    def test_empty_values_fall_through(self):
        body = RequestBody(values={"personal[full_name]": "  ", "full_name": "Bare"})
        self.assertEqual(body.get("full_name", "personal"), "Bare")
        self.assertEqual(body.get("missing", "personal"), "")

    def test_json_numbers_are_read_as_text(self):
        body = RequestBody(values=_flatten({"amount": 5000, "repayment_period": 12, "flag": True}))
        self.assertEqual(body.get("amount"), "5000")
        self.assertEqual(body.get("repayment_period"), "12")
        self.assertEqual(body.get("flag"), "")

    def test_json_nested_sections_flatten(self):
        body = RequestBody(values=_flatten({
            "personal": {"full_name": "Jane Doe", "email": "jane@example.com", "phone_number": "0501234567"},
            "business": {"business_name": "Acme", "trade_license_number": "TL-1"},
            "trade": {"filename": "license.pdf", "file_url": "https://files.test/license.pdf"},
        }))
        reg = FullRegistrationIn.from_body(body)
        self.assertEqual(reg.personal.full_name, "Jane Doe")
        self.assertEqual(reg.business.trade_license_number, "TL-1")
        self.assertEqual(reg.trade.file_url, "https://files.test/license.pdf")

    def test_form_flat_names(self):
        body = RequestBody(values={
            "personal_full_name": "Jane Doe",
            "business_business_name": "Acme",
            "trade_license_number": "TL-9",
        })
        reg = FullRegistrationIn.from_body(body)
        self.assertEqual(reg.personal.full_name, "Jane Doe")
        self.assertEqual(reg.business.business_name, "Acme")
        self.assertEqual(reg.business.trade_license_number, "TL-9")


if __name__ == "__main__":
    unittest.main()

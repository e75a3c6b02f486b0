"""
Completion is derived from which registration records exist, never stored.
"""
import itertools
import unittest

from schemas.registration import BusinessDetailsIn, PersonalDetailsIn, TradeLicenseIn
from services.accounts import ensure_account
from services.completion import derive_status, get_account_status
from services.errors import NotFoundError
from services.registration import RegistrationService
from support import DatabaseTestCase, FakeStorage

PERSONAL = PersonalDetailsIn(full_name="Jane Doe", email="jane@example.com", phone_number="0501234567")
BUSINESS = BusinessDetailsIn(business_name="Acme Trading", trade_license_number="TL-123")
TRADE = TradeLicenseIn(filename="license.pdf", file_url="https://files.test/license.pdf")


class TestDeriveStatus(unittest.TestCase):
    def test_complete_only_when_all_three_present(self):
        for has_personal, has_business, has_trade in itertools.product([False, True], repeat=3):
            status = derive_status("acc-1", "a@b.com", has_personal, has_business, has_trade)
            expected = has_personal and has_business and has_trade
            self.assertEqual(status.is_complete, expected)
            self.assertEqual(status.status, "old" if expected else "new")
            self.assertEqual(status.has_personal_details, has_personal)
            self.assertEqual(status.has_business_details, has_business)
            self.assertEqual(status.has_trade_license, has_trade)


class TestAccountStatus(DatabaseTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.account = await ensure_account(self.session, "owner@example.com", self.clock())
        self.registration = RegistrationService(FakeStorage(), clock=self.clock)

    async def test_unknown_account(self):
        with self.assertRaises(NotFoundError):
            await get_account_status(self.session, "no-such-account")

    async def test_new_account_has_nothing(self):
        status = await get_account_status(self.session, self.account.id)
        self.assertEqual(status.status, "new")
        self.assertFalse(status.is_complete)
        self.assertEqual(status.email, "owner@example.com")

    async def test_same_result_regardless_of_write_order(self):
        writes = {
            "personal": lambda: self.registration.upsert_personal(self.session, self.account.id, PERSONAL),
            "business": lambda: self.registration.upsert_business(self.session, self.account.id, BUSINESS),
            "trade": lambda: self.registration.upsert_trade_license(self.session, self.account.id, TRADE),
        }
        for name in ("trade", "personal"):
            await writes[name]()
            status = await get_account_status(self.session, self.account.id)
            self.assertFalse(status.is_complete)
        self.assertTrue(status.has_trade_license)
        self.assertTrue(status.has_personal_details)
        self.assertFalse(status.has_business_details)

        await writes["business"]()
        status = await get_account_status(self.session, self.account.id)
        self.assertTrue(status.is_complete)
        self.assertEqual(status.status, "old")

        # Rewriting a record does not change the projection.
        await writes["personal"]()
        self.assertEqual(await get_account_status(self.session, self.account.id), status)


if __name__ == "__main__":
    unittest.main()

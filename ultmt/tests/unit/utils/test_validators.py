from unittest import TestCase

from ultmt.utils.validators import is_valid_email, is_valid_handle, is_valid_name, is_valid_password


class ValidatorsTests(TestCase):
    def test_is_valid_email(self):
        self.assertTrue(is_valid_email("jamie@example.com"))
        for email in [None, "", "jamie", "jamie@", "@example.com"]:
            with self.subTest(email=email):
                self.assertFalse(is_valid_email(email))

    def test_is_valid_password(self):
        self.assertTrue(is_valid_password("Sup3r$ecret"))
        for password in [None, "S3$a", "supersecret", "SUP3R$ECRET", "Super$ecret", "Sup3rSecret"]:
            with self.subTest(password=password):
                self.assertFalse(is_valid_password(password))

    def test_is_valid_handle(self):
        for handle in ["ab", "pghtemper", "a" * 20]:
            with self.subTest(handle=handle):
                self.assertTrue(is_valid_handle(handle))
        for handle in [None, "", "a", "a" * 21, "pgh temper", "pgh-temper"]:
            with self.subTest(handle=handle):
                self.assertFalse(is_valid_handle(handle))

    def test_is_valid_name(self):
        self.assertTrue(is_valid_name("J" * 20))
        self.assertFalse(is_valid_name("J" * 21))
        self.assertFalse(is_valid_name(None))

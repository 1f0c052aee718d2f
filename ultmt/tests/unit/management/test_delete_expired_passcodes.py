from io import StringIO
from unittest import TestCase
from unittest.mock import Mock, patch

from django.core.management import call_command


class DeleteExpiredPasscodesCommandTests(TestCase):
    @patch("ultmt.management.commands.delete_expired_passcodes.OneTimePasscodeService.delete_expired_passcodes")
    def test_reports_deleted_count(self, mock_delete: Mock):
        mock_delete.return_value = 2
        out = StringIO()

        call_command("delete_expired_passcodes", stdout=out)

        mock_delete.assert_called_once_with()
        self.assertIn("2", out.getvalue())

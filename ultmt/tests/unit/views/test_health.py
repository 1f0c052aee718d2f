from unittest import TestCase
from unittest.mock import patch

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient


class HealthViewTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("health")

    @patch("ultmt.views.health.DatabaseManager")
    def test_healthy(self, mock_manager):
        mock_manager.return_value.check_database_health.return_value = True

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"status": "UP", "components": {"mongodb": {"status": "UP"}}})

    @patch("ultmt.views.health.DatabaseManager")
    def test_database_down(self, mock_manager):
        mock_manager.return_value.check_database_health.return_value = False

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["components"]["mongodb"]["status"], "DOWN")

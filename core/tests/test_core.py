from unittest import mock

from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.exceptions import ErrorDetail
from rest_framework.test import APIClient

from core.exceptions import NotFound, custom_exception_handler, flatten_detail
from core.responses import api_response
from core.storage import storage_name_from_url


class FlattenDetailTestCase(SimpleTestCase):
    def test_field_errors_are_prefixed(self):
        detail = {
            "title": [ErrorDetail("This field is required.")],
            "repositoryUrl": [ErrorDetail("Enter a valid URL.")],
        }
        self.assertEqual(
            flatten_detail(detail),
            "title: This field is required.; repositoryUrl: Enter a valid URL.",
        )

    def test_detail_and_non_field_errors_are_bare(self):
        self.assertEqual(flatten_detail({"detail": "Project not found"}), "Project not found")
        self.assertEqual(flatten_detail({"non_field_errors": ["No updates provided"]}), "No updates provided")

    def test_nested_errors(self):
        detail = {"contributors": [{"userId": ["Invalid pk."]}]}
        self.assertEqual(flatten_detail(detail), "contributors: userId: Invalid pk.")


class ExceptionHandlerTestCase(SimpleTestCase):
    def test_api_exception_is_enveloped(self):
        resp = custom_exception_handler(NotFound("Project not found"), {})

        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.data, {"status": "error", "message": "Project not found"})

    def test_unexpected_exception_becomes_500(self):
        with self.assertLogs("showcase", level="ERROR"):
            resp = custom_exception_handler(ValueError("boom"), {})

        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.data, {"status": "error", "message": "boom"})


class ApiResponseTestCase(SimpleTestCase):
    def test_envelope(self):
        resp = api_response("Done", {"id": 1}, status_code=201)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data, {"status": "success", "message": "Done", "data": {"id": 1}})

    def test_data_omitted_when_none(self):
        self.assertEqual(api_response("Done").data, {"status": "success", "message": "Done"})


class StorageNameFromUrlTestCase(SimpleTestCase):
    @override_settings(MEDIA_URL="/media/")
    def test_local_media_urls(self):
        self.assertEqual(storage_name_from_url("/media/projects/a.png"), "projects/a.png")
        self.assertEqual(storage_name_from_url("http://testserver/media/avatars/b.jpg"), "avatars/b.jpg")
        self.assertIsNone(storage_name_from_url("https://images.example.com/other/c.png"))
        self.assertIsNone(storage_name_from_url(""))
        self.assertIsNone(storage_name_from_url(None))

    @override_settings(MEDIA_URL="https://cdn.example.com/")
    def test_absolute_media_urls_must_match_host(self):
        self.assertEqual(storage_name_from_url("https://cdn.example.com/avatars/x.jpg"), "avatars/x.jpg")
        self.assertIsNone(storage_name_from_url("https://elsewhere.com/avatars/x.jpg"))


class HealthCheckTestCase(TestCase):
    def test_health_check(self):
        resp = APIClient().get(reverse("health-check"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertTrue(resp.json()["db"])

    def test_unreachable_database_reports_degraded(self):
        with mock.patch("core.views.database_reachable", return_value=False):
            resp = APIClient().get(reverse("health-check"))

        self.assertEqual(resp.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(resp.json()["status"], "degraded")
        self.assertFalse(resp.json()["db"])

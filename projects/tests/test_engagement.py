from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.exceptions import NotFound
from projects.engagement import EngagementTracker
from projects.models import Project
from projects.store import ProjectStore

User = get_user_model()


class EngagementTrackerTestCase(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(username="owner", email="owner@example.com", password="pass")
        self.users = [
            User.objects.create_user(username=f"fan{i}", email=f"fan{i}@example.com", password="pass")
            for i in range(3)
        ]
        self.project = ProjectStore.insert({
            "title": "Counter",
            "description": "Gets liked",
            "repository_url": "https://github.com/example/counter",
            "created_by": self.owner,
        })

    def assertCountersConsistent(self):
        project = Project.objects.get(pk=self.project.pk)
        self.assertEqual(project.likes_count, project.likes.count())
        self.assertEqual(project.views_count, project.views.count())

    def test_toggle_like_adds_then_removes(self):
        first = EngagementTracker.toggle_like(self.project.pk, self.users[0].pk)
        self.assertEqual(first, {"likesCount": 1, "liked": True})

        second = EngagementTracker.toggle_like(self.project.pk, self.users[0].pk)
        self.assertEqual(second, {"likesCount": 0, "liked": False})
        self.assertCountersConsistent()

    def test_likes_count_matches_likes_after_any_sequence(self):
        sequence = [0, 1, 0, 2, 1, 1, 2, 0, 0]
        for index in sequence:
            EngagementTracker.toggle_like(self.project.pk, self.users[index].pk)
            self.assertCountersConsistent()

        project = Project.objects.get(pk=self.project.pk)
        # user0 toggled 4 times, user1 3 times, user2 twice
        self.assertEqual(set(project.likes.values_list("id", flat=True)), {self.users[1].pk})

    def test_like_recovers_from_drifted_counter(self):
        Project.objects.filter(pk=self.project.pk).update(likes_count=7)

        result = EngagementTracker.toggle_like(self.project.pk, self.users[0].pk)

        self.assertEqual(result["likesCount"], 1)
        self.assertCountersConsistent()

    def test_unique_view_counts_once_per_user(self):
        first = EngagementTracker.add_unique_view(self.project.pk, self.users[0].pk)
        second = EngagementTracker.add_unique_view(self.project.pk, self.users[0].pk)
        other = EngagementTracker.add_unique_view(self.project.pk, self.users[1].pk)

        self.assertEqual(first, {"viewsCount": 1, "viewed": True})
        self.assertEqual(second, {"viewsCount": 1, "viewed": False})
        self.assertEqual(other, {"viewsCount": 2, "viewed": True})
        self.assertCountersConsistent()

    def test_missing_project_raises_not_found(self):
        with self.assertRaises(NotFound):
            EngagementTracker.toggle_like(99999, self.users[0].pk)
        with self.assertRaises(NotFound):
            EngagementTracker.add_unique_view(99999, self.users[0].pk)


class EngagementApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.owner = User.objects.create_user(username="owner", email="owner@example.com", password="pass")
        self.viewer = User.objects.create_user(username="viewer", email="viewer@example.com", password="pass")
        self.project = ProjectStore.insert({
            "title": "Liked",
            "description": "Gets liked",
            "repository_url": "https://github.com/example/liked",
            "created_by": self.owner,
        })
        self.like_url = reverse("project-like", args=[self.project.pk])
        self.view_url = reverse("project-view", args=[self.project.pk])

    def test_like_requires_authentication(self):
        resp = self.client.post(self.like_url)

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.json()["status"], "error")
        self.assertEqual(Project.objects.get(pk=self.project.pk).likes_count, 0)

    def test_anonymous_views_are_not_tracked(self):
        resp = self.client.post(self.view_url)

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(Project.objects.get(pk=self.project.pk).views_count, 0)

    def test_like_toggle_round_trip(self):
        self.client.force_authenticate(self.viewer)

        resp = self.client.post(self.like_url)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["data"], {"likesCount": 1, "liked": True})

        detail = self.client.get(reverse("project-detail", args=[self.project.pk])).json()["data"]
        self.assertEqual(detail["likes"], [self.viewer.pk])
        self.assertEqual(detail["likesCount"], 1)

        resp = self.client.post(self.like_url)
        self.assertEqual(resp.json()["data"], {"likesCount": 0, "liked": False})

    def test_view_twice_reports_already_counted(self):
        self.client.force_authenticate(self.viewer)

        first = self.client.post(self.view_url).json()["data"]
        second = self.client.post(self.view_url).json()["data"]

        self.assertEqual(first, {"viewsCount": 1, "viewed": True})
        self.assertEqual(second, {"viewsCount": 1, "viewed": False})

    def test_like_missing_project_returns_404(self):
        self.client.force_authenticate(self.viewer)

        resp = self.client.post(reverse("project-like", args=[99999]))

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.json()["message"], "Project not found")

    def test_owner_edit_path_cannot_touch_counters(self):
        self.client.force_authenticate(self.owner)

        resp = self.client.put(
            reverse("project-detail", args=[self.project.pk]),
            {"viewsCount": 1000, "views": [self.viewer.pk]},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Project.objects.get(pk=self.project.pk).views_count, 0)

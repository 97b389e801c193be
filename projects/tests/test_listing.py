from django.contrib.auth import get_user_model
from django.http import QueryDict
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from projects.listing import ListingQuery, split_tags
from projects.store import ProjectStore

User = get_user_model()


def make_project(owner, title, description="Demo project", category=()):
    return ProjectStore.insert({
        "title": title,
        "description": description,
        "repository_url": "https://github.com/example/repo",
        "category": list(category),
        "created_by": owner,
    })


class ListingQueryParsingTestCase(TestCase):
    def parse(self, query_string):
        return ListingQuery.from_params(QueryDict(query_string))

    def test_defaults(self):
        query = self.parse("")
        self.assertEqual(query, ListingQuery(search="", tags=(), page=1, limit=10))
        self.assertEqual(query.skip, 0)

    def test_page_floor_and_bad_values(self):
        self.assertEqual(self.parse("page=0").page, 1)
        self.assertEqual(self.parse("page=-4").page, 1)
        self.assertEqual(self.parse("page=abc").page, 1)
        self.assertEqual(self.parse("page=3&limit=5").skip, 10)

    def test_limit_default_and_cap(self):
        self.assertEqual(self.parse("limit=0").limit, 10)
        self.assertEqual(self.parse("limit=nope").limit, 10)
        self.assertEqual(self.parse("limit=25").limit, 25)
        self.assertEqual(self.parse("limit=5000").limit, 100)

    @override_settings(PROJECTS_PAGE_SIZE=20, PROJECTS_MAX_PAGE_SIZE=50)
    def test_limits_follow_settings(self):
        self.assertEqual(self.parse("").limit, 20)
        self.assertEqual(self.parse("limit=500").limit, 50)

    def test_split_tags(self):
        self.assertEqual(split_tags(" AI, ,Mobile ,"), ("AI", "Mobile"))
        self.assertEqual(split_tags(""), ())
        self.assertEqual(split_tags(None), ())


class ProjectListingApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.owner = User.objects.create_user(username="owner", email="owner@example.com", password="pass")
        self.url = reverse("project-list-create")

        make_project(self.owner, "AI Tutor", "Homework helper", category=["AI", "Education"])
        make_project(self.owner, "Budget Tracker", "Uses an ai model to sort spending", category=["Finance"])
        make_project(self.owner, "Bus Timings", "Shows the next bus", category=["Mobile"])
        make_project(self.owner, "Weather Board", "Shows the forecast", category=["Web"])

    def titles(self, resp):
        return sorted(p["title"] for p in resp.json()["data"]["projects"])

    def test_listing_is_public_and_enveloped(self):
        resp = self.client.get(self.url)

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        body = resp.json()
        self.assertEqual(body["status"], "success")
        self.assertEqual(body["data"]["total"], 4)
        self.assertEqual(body["data"]["page"], 1)
        self.assertEqual(body["data"]["totalPages"], 1)

    def test_newest_first(self):
        resp = self.client.get(self.url)
        titles = [p["title"] for p in resp.json()["data"]["projects"]]
        self.assertEqual(titles, ["Weather Board", "Bus Timings", "Budget Tracker", "AI Tutor"])

    def test_search_matches_title_or_description_case_insensitively(self):
        resp = self.client.get(self.url, {"search": "AI"})
        self.assertEqual(self.titles(resp), ["AI Tutor", "Budget Tracker"])

    def test_tags_match_any(self):
        resp = self.client.get(self.url, {"tags": "AI,Mobile"})
        self.assertEqual(self.titles(resp), ["AI Tutor", "Bus Timings"])

    def test_search_and_tags_intersect(self):
        resp = self.client.get(self.url, {"search": "ai", "tags": "AI, Mobile"})
        self.assertEqual(self.titles(resp), ["AI Tutor"])

    def test_project_with_several_matching_tags_listed_once(self):
        resp = self.client.get(self.url, {"tags": "AI,Education"})

        data = resp.json()["data"]
        self.assertEqual(data["total"], 1)
        self.assertEqual(len(data["projects"]), 1)

    def test_no_matches_is_not_an_error(self):
        resp = self.client.get(self.url, {"search": "blockchain"})

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()["data"]
        self.assertEqual(data["projects"], [])
        self.assertEqual(data["total"], 0)
        self.assertEqual(data["totalPages"], 0)


class ProjectPaginationApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        owner = User.objects.create_user(username="owner", email="owner@example.com", password="pass")
        for i in range(25):
            make_project(owner, f"Project {i:02d}", category=["Web"])
        make_project(owner, "Off topic", category=["Games"])
        self.url = reverse("project-list-create")

    def test_first_page(self):
        resp = self.client.get(self.url, {"tags": "Web", "limit": 10, "page": 1})

        data = resp.json()["data"]
        self.assertEqual(len(data["projects"]), 10)
        self.assertEqual(data["total"], 25)
        self.assertEqual(data["totalPages"], 3)
        self.assertEqual(data["projects"][0]["title"], "Project 24")

    def test_last_page_is_partial(self):
        resp = self.client.get(self.url, {"tags": "Web", "limit": 10, "page": 3})

        data = resp.json()["data"]
        self.assertEqual(len(data["projects"]), 5)
        self.assertEqual(data["page"], 3)
        self.assertEqual(data["projects"][-1]["title"], "Project 00")

    def test_page_past_the_end_is_empty(self):
        resp = self.client.get(self.url, {"tags": "Web", "limit": 10, "page": 9})

        data = resp.json()["data"]
        self.assertEqual(data["projects"], [])
        self.assertEqual(data["total"], 25)


class ListingSearchTextTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.owner = User.objects.create_user(username="owner", email="owner@example.com", password="pass")
        self.url = reverse("project-list-create")

    def test_description_with_entities_is_stored_and_searchable(self):
        self.client.force_authenticate(self.owner)
        resp = self.client.post(
            self.url,
            {
                "title": "Lab Helper",
                "description": "R&D tool for x < y checks",
                "repositoryUrl": "https://github.com/example/lab-helper",
            },
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        self.assertEqual(resp.json()["data"]["description"], "R&D tool for x < y checks")

        self.client.force_authenticate(None)
        for term in ("R&D", "x < y"):
            data = self.client.get(self.url, {"search": term}).json()["data"]
            self.assertEqual(data["total"], 1, term)

    def test_search_term_is_not_trimmed(self):
        make_project(self.owner, "AI Tutor", "Homework helper")
        make_project(self.owner, "Budget Tracker", "Uses an ai model to sort spending")

        resp = self.client.get(self.url, {"search": " AI "})

        titles = [p["title"] for p in resp.json()["data"]["projects"]]
        self.assertEqual(titles, ["Budget Tracker"])

    def test_huge_page_number_returns_empty_page(self):
        make_project(self.owner, "Only one")

        resp = self.client.get(self.url, {"page": "99999999999999999999"})

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()["data"]
        self.assertEqual(data["projects"], [])
        self.assertEqual(data["total"], 1)

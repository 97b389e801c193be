from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from projects.engagement import EngagementTracker
from projects.models import Project
from projects.services import ProjectLifecycleService

User = get_user_model()

DEMO_PASSWORD = "showcase-demo-123"

DEMO_USERS = [
    ("alice", "Alice Rao", "alice@example.com"),
    ("bob", "Bob Mehta", "bob@example.com"),
    ("carol", "Carol Singh", "carol@example.com"),
]

DEMO_PROJECTS = [
    {
        "owner": "alice",
        "title": "Campus Navigator",
        "description": "Indoor navigation app for the university campus with AI route hints.",
        "repository_url": "https://github.com/example/campus-navigator",
        "live_demo_url": "https://campus-nav.example.com",
        "technologies": "React Native, Node.js, MongoDB",
        "category": "Mobile, AI",
        "contributors": [("bob", "Backend")],
    },
    {
        "owner": "bob",
        "title": "Lecture Summarizer",
        "description": "Turns recorded lectures into searchable notes.",
        "repository_url": "https://github.com/example/lecture-summarizer",
        "technologies": "Python, Whisper, FastAPI",
        "category": "AI, Education",
        "contributors": [],
    },
    {
        "owner": "carol",
        "title": "Hostel Mess Feedback",
        "description": "Weekly menu ratings and complaint tracking for hostel messes.",
        "repository_url": "https://github.com/example/mess-feedback",
        "technologies": "Django, PostgreSQL",
        "category": "Web",
        "contributors": [("alice", "Design")],
    },
]


class Command(BaseCommand):
    help = "Seeds the database with demo users, projects, likes and views"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding showcase data...")

        # 1. Ensure Users
        users = {}
        for username, name, email in DEMO_USERS:
            user, created = User.objects.get_or_create(
                username=username,
                defaults={"name": name, "email": email},
            )
            if created:
                user.set_password(DEMO_PASSWORD)
                user.save()
            users[username] = user

        # 2. Projects (skipped when a project with the same title exists)
        created_projects = []
        for entry in DEMO_PROJECTS:
            owner = users[entry["owner"]]
            if Project.objects.filter(title=entry["title"], created_by=owner).exists():
                continue

            fields = {key: value for key, value in entry.items() if key not in ("owner", "contributors")}
            fields["contributors"] = [
                {"user": users[username], "name": users[username].name, "role": role}
                for username, role in entry["contributors"]
            ]
            created_projects.append(ProjectLifecycleService.create(owner, fields))

        # 3. Engagement: everyone views everything, non-owners like
        for project in created_projects:
            for user in users.values():
                EngagementTracker.add_unique_view(project.pk, user.pk)
                if user.pk != project.created_by_id:
                    EngagementTracker.toggle_like(project.pk, user.pk)

        self.stdout.write(self.style.SUCCESS(
            f"Done: {len(users)} users, {len(created_projects)} new projects."
        ))

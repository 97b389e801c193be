"""
Likes and unique views on a single project.

Each operation is one transaction holding the project's row lock:
the membership row is inserted/deleted and the counter is recomputed
from the membership set before commit, so counters cannot drift from
their sets and concurrent toggles cannot lose updates.
"""
import logging

from django.db import transaction
from django.utils import timezone

from .models import Project, ProjectLike, ProjectView
from .store import ProjectStore

logger = logging.getLogger("showcase")


class EngagementTracker:
    @staticmethod
    def toggle_like(project_id, user_id) -> dict:
        """
        Like if not liked yet, unlike otherwise.
        Not idempotent: two calls restore the original state.
        """
        with transaction.atomic():
            project = ProjectStore.lock(project_id)

            removed, _ = ProjectLike.objects.filter(project=project, user_id=user_id).delete()
            if not removed:
                ProjectLike.objects.create(project=project, user_id=user_id)

            likes_count = ProjectLike.objects.filter(project=project).count()
            Project.objects.filter(pk=project.pk).update(
                likes_count=likes_count,
                updated_at=timezone.now(),
            )

        liked = not removed
        logger.debug(f"User {user_id} {'liked' if liked else 'unliked'} project {project_id}")
        return {"likesCount": likes_count, "liked": liked}

    @staticmethod
    def add_unique_view(project_id, user_id) -> dict:
        """
        Count a view once per user. Repeated calls are no-ops and
        report viewed=False.
        """
        with transaction.atomic():
            project = ProjectStore.lock(project_id)

            _, created = ProjectView.objects.get_or_create(project=project, user_id=user_id)
            if not created:
                return {"viewsCount": project.views_count, "viewed": False}

            views_count = ProjectView.objects.filter(project=project).count()
            Project.objects.filter(pk=project.pk).update(
                views_count=views_count,
                updated_at=timezone.now(),
            )

        logger.debug(f"User {user_id} viewed project {project_id}")
        return {"viewsCount": views_count, "viewed": True}

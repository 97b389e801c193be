"""
Persistence for Project records.

All reads and writes of projects go through ProjectStore so that
relation loading, validation of required fields and row locking
live in one place.
"""
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Prefetch

from core.exceptions import NotFound, ValidationError
from .models import Project, ProjectContributor, ProjectTag

logger = logging.getLogger("showcase")

User = get_user_model()

REQUIRED_FIELDS = ("title", "description", "repository_url")

# Content fields; likes/views and their counters belong to projects.engagement
WRITABLE_FIELDS = frozenset({
    "title",
    "description",
    "category",
    "technologies",
    "repository_url",
    "live_demo_url",
    "project_image_url",
    "contributors",
})

DEFAULT_SORT = ("-created_at", "-id")


def with_relations(queryset):
    """Load everything the API representation needs in a fixed number of queries."""
    user_ids = User.objects.only("id")
    return queryset.select_related("created_by").prefetch_related(
        "tags",
        Prefetch("contributors", queryset=ProjectContributor.objects.all()),
        Prefetch("likes", queryset=user_ids),
        Prefetch("views", queryset=user_ids),
    )


def _check_required(fields, names):
    missing = [name for name in names if not str(fields.get(name) or "").strip()]
    if missing:
        raise ValidationError({name: "This field is required." for name in missing})


def _replace_tags(project, names):
    project.tags.all().delete()
    ProjectTag.objects.bulk_create([
        ProjectTag(project=project, name=name, position=position)
        for position, name in enumerate(names)
    ])


def _replace_contributors(project, contributors):
    project.contributors.all().delete()
    ProjectContributor.objects.bulk_create([
        ProjectContributor(
            project=project,
            user=contributor.get("user"),
            role=contributor.get("role", ""),
            name=contributor.get("name", ""),
            position=position,
        )
        for position, contributor in enumerate(contributors)
    ])


class ProjectStore:
    @staticmethod
    def insert(fields) -> Project:
        """
        Persist a new project with its tags and contributors.
        Nothing is written when a required field is missing.
        """
        _check_required(fields, REQUIRED_FIELDS)

        fields = dict(fields)
        category = fields.pop("category", None) or []
        contributors = fields.pop("contributors", None) or []

        with transaction.atomic():
            project = Project.objects.create(**fields)
            _replace_tags(project, category)
            _replace_contributors(project, contributors)

        return ProjectStore.find_by_id(project.pk)

    @staticmethod
    def find_by_id(project_id) -> Project:
        try:
            return with_relations(Project.objects.all()).get(pk=project_id)
        except Project.DoesNotExist:
            raise NotFound("Project not found")

    @staticmethod
    def lock(project_id) -> Project:
        """
        Row-lock a project for the rest of the current transaction.
        Must be called inside transaction.atomic().
        """
        try:
            return Project.objects.select_for_update().get(pk=project_id)
        except Project.DoesNotExist:
            raise NotFound("Project not found")

    @staticmethod
    def find_many(filter=None, skip=0, limit=None, sort=None):
        """
        Returns (projects, total) where total counts every match,
        not only the returned page. limit=None returns all matches.
        """
        queryset = Project.objects.all()
        if filter is not None:
            queryset = queryset.filter(filter)
        # tag / contributor joins fan out rows
        queryset = queryset.distinct()

        total = queryset.count()
        if skip >= total:
            return [], total

        queryset = with_relations(queryset.order_by(*(sort or DEFAULT_SORT)))
        if limit is None:
            projects = list(queryset[skip:])
        else:
            projects = list(queryset[skip:skip + limit])

        return projects, total

    @staticmethod
    def update_by_id(project_id, fields) -> Project:
        """
        Apply only the provided fields. Absent fields are left untouched;
        category / contributors replace the whole list when provided.
        """
        unknown = sorted(set(fields) - WRITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(unknown)}")

        _check_required(fields, [name for name in REQUIRED_FIELDS if name in fields])

        fields = dict(fields)
        category = fields.pop("category", None)
        contributors = fields.pop("contributors", None)

        with transaction.atomic():
            project = ProjectStore.lock(project_id)
            for attr, value in fields.items():
                setattr(project, attr, value)
            # auto_now refreshes updated_at even for list-only updates
            project.save()

            if category is not None:
                _replace_tags(project, category)
            if contributors is not None:
                _replace_contributors(project, contributors)

        return ProjectStore.find_by_id(project_id)

    @staticmethod
    def delete_by_id(project_id) -> Project:
        """
        Permanently delete a project (tags, contributors, likes and views
        cascade) and return the removed record.
        """
        with transaction.atomic():
            ProjectStore.lock(project_id)
            project = ProjectStore.find_by_id(project_id)
            project.delete()

        # delete() clears the pk; the returned record keeps its identifier
        project.pk = project_id
        logger.info(f"Deleted project {project_id}")
        return project

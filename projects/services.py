"""
Create / update / delete orchestration for projects.

Ownership rule: only the user referenced by created_by may edit or
delete a project. Likes and views never go through this module.
"""
import logging

from django.db import transaction
from django.db.models import Q

from core.exceptions import Forbidden
from core.storage import delete_image, upload_image
from .fields import normalize_string_list
from .serializers import ProjectUpdateSerializer
from .store import ProjectStore

logger = logging.getLogger("showcase")


def ensure_owner(user, project):
    if project.created_by_id != getattr(user, "pk", None):
        raise Forbidden("Only the project owner can modify this project")


class ProjectLifecycleService:
    @staticmethod
    def create(owner, fields, image=None):
        """
        Create a project owned by `owner`.

        `fields` uses model names (title, description, repository_url, ...).
        technologies / category may still be raw CSV strings here.
        """
        fields = dict(fields)
        fields["technologies"] = normalize_string_list(fields.get("technologies"))
        fields["category"] = normalize_string_list(fields.get("category"))
        fields["created_by"] = owner

        image_url = None
        if image is not None:
            image_url = upload_image(image, folder="projects")
            fields["project_image_url"] = image_url

        try:
            project = ProjectStore.insert(fields)
        except Exception:
            # the record was never written, do not keep its image
            if image_url:
                delete_image(image_url)
            raise

        logger.info(f"User {owner.pk} created project {project.pk}")
        return project

    @staticmethod
    def update(requester, project_id, data):
        """
        Owner-only partial update.

        `data` is the raw request body; it is checked against the
        allow-list in ProjectUpdateSerializer before anything is persisted.
        """
        project = ProjectStore.find_by_id(project_id)
        ensure_owner(requester, project)

        serializer = ProjectUpdateSerializer(data=data, partial=True, context={"project": project})
        serializer.is_valid(raise_exception=True)
        fields = dict(serializer.validated_data)

        previous_image = project.project_image_url
        updated = ProjectStore.update_by_id(project.pk, fields)

        if previous_image and updated.project_image_url != previous_image:
            transaction.on_commit(lambda: delete_image(previous_image))

        logger.info(f"User {requester.pk} updated project {project.pk}: {', '.join(sorted(fields))}")
        return updated

    @staticmethod
    def delete(requester, project_id):
        """Owner-only permanent delete. Returns the removed record."""
        project = ProjectStore.find_by_id(project_id)
        ensure_owner(requester, project)
        return ProjectStore.delete_by_id(project.pk)

    @staticmethod
    def projects_for_user(user_id):
        """Projects created by, or listing as contributor, the given user. Newest first."""
        projects, _ = ProjectStore.find_many(
            filter=Q(created_by_id=user_id) | Q(contributors__user_id=user_id),
        )
        return projects

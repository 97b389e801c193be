from django.conf import settings
from django.db import models


class Project(models.Model):
    """
    A showcased unit of student work.

    Engagement counters mirror the membership sets:
        likes_count == likes.count()
        views_count == views.count()
    Only projects.engagement mutates likes/views and their counters.
    """
    title = models.CharField(max_length=200)
    description = models.TextField()

    technologies = models.JSONField(default=list, blank=True)

    repository_url = models.URLField(max_length=2048)
    live_demo_url = models.URLField(max_length=2048, blank=True, default="")
    project_image_url = models.CharField(max_length=2048, blank=True, default="")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="owned_projects"
    )

    likes = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="ProjectLike",
        related_name="liked_projects",
        blank=True,
    )
    likes_count = models.PositiveIntegerField(default=0)

    views = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="ProjectView",
        related_name="viewed_projects",
        blank=True,
    )
    views_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="project_created_idx"),
            models.Index(fields=["created_by", "-created_at"], name="project_owner_idx"),
        ]

    def __str__(self):
        return self.title

    @property
    def category(self):
        """Tag names in submission order."""
        return [tag.name for tag in self.tags.all()]


class ProjectTag(models.Model):
    """One entry of a project's category list. Duplicates are allowed."""
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="tags")
    name = models.CharField(max_length=100)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]
        indexes = [
            models.Index(fields=["name"], name="projecttag_name_idx"),
        ]

    def __str__(self):
        return self.name


class ProjectContributor(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="contributors")
    # Weak reference: lookup only, the project survives the user
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="contributions",
    )
    role = models.CharField(max_length=100, blank=True, default="")
    name = models.CharField(max_length=150, blank=True, default="")
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self):
        return self.name or str(self.user_id)


class ProjectLike(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="like_records")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="project_likes")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["project", "user"], name="unique_project_like"),
        ]


class ProjectView(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="view_records")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="project_views")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["project", "user"], name="unique_project_view"),
        ]

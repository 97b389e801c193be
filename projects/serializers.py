from rest_framework import serializers

from core.sanitizers import sanitize_description, sanitize_title
from core.storage import storage_name_from_url, validate_image_size
from .fields import ContributorListField, StringListField
from .models import Project, ProjectContributor


class ContributorSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True, allow_null=True)

    class Meta:
        model = ProjectContributor
        fields = ['userId', 'role', 'name']


class ProjectSerializer(serializers.ModelSerializer):
    """Read representation, camelCase as consumed by the web client."""
    category = serializers.ListField(child=serializers.CharField(), read_only=True)
    repositoryUrl = serializers.CharField(source='repository_url', read_only=True)
    liveDemoUrl = serializers.CharField(source='live_demo_url', read_only=True)
    projectImageUrl = serializers.CharField(source='project_image_url', read_only=True)
    contributors = ContributorSerializer(many=True, read_only=True)
    createdBy = serializers.IntegerField(source='created_by_id', read_only=True)
    createdByName = serializers.CharField(source='created_by.name', read_only=True)
    likes = serializers.PrimaryKeyRelatedField(many=True, read_only=True)
    likesCount = serializers.IntegerField(source='likes_count', read_only=True)
    views = serializers.PrimaryKeyRelatedField(many=True, read_only=True)
    viewsCount = serializers.IntegerField(source='views_count', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Project
        fields = [
            'id',
            'title',
            'description',
            'category',
            'technologies',
            'repositoryUrl',
            'liveDemoUrl',
            'projectImageUrl',
            'contributors',
            'createdBy',
            'createdByName',
            'likes',
            'likesCount',
            'views',
            'viewsCount',
            'createdAt',
            'updatedAt',
        ]


class ProjectTextMixin:
    def validate_title(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("This field may not be blank.")
        return value

    def validate_description(self, value):
        value = sanitize_description(value)
        if not value:
            raise serializers.ValidationError("This field may not be blank.")
        return value


class ProjectCreateSerializer(ProjectTextMixin, serializers.Serializer):
    """
    Multipart (or JSON) submission of a new project.
    technologies / category accept CSV, JSON lists or repeated keys.
    """
    title = serializers.CharField(max_length=200)
    description = serializers.CharField()
    repositoryUrl = serializers.URLField(source='repository_url', max_length=2048)
    liveDemoUrl = serializers.URLField(
        source='live_demo_url', max_length=2048, required=False, allow_blank=True,
    )
    technologies = StringListField(required=False)
    category = StringListField(required=False)
    contributors = ContributorListField(required=False)
    projectImage = serializers.ImageField(
        source='project_image', required=False, allow_null=True,
        validators=[validate_image_size],
    )


class ProjectUpdateSerializer(ProjectTextMixin, serializers.Serializer):
    """
    Owner edits. Only these keys are accepted; anything else
    (createdBy, likes, views, counters, ...) is rejected.
    """
    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False)
    category = StringListField(required=False)
    technologies = StringListField(required=False)
    liveDemoUrl = serializers.URLField(
        source='live_demo_url', max_length=2048, required=False, allow_blank=True,
    )
    projectImageUrl = serializers.CharField(
        source='project_image_url', max_length=2048, required=False, allow_blank=True,
    )

    def validate_projectImageUrl(self, value):
        # managed storage files may only be referenced by the project that uploaded them
        project = self.context.get("project")
        current = project.project_image_url if project is not None else ""
        if value and value != current and storage_name_from_url(value):
            raise serializers.ValidationError(
                "Only an external URL or this project's current image can be used."
            )
        return value

    def validate(self, attrs):
        unknown = sorted(set(self.initial_data) - set(self.fields))
        if unknown:
            raise serializers.ValidationError(
                f"Fields cannot be updated: {', '.join(unknown)}"
            )
        if not attrs:
            raise serializers.ValidationError("No updates provided")
        return attrs

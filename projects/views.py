from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework import status

from core.responses import api_response
from .engagement import EngagementTracker
from .listing import ListingQuery
from .serializers import ProjectCreateSerializer, ProjectSerializer
from .services import ProjectLifecycleService
from .store import ProjectStore


class PublicReadMixin:
    """Reads are public; every write needs an authenticated user."""

    def get_permissions(self):
        if self.request.method in ("GET", "HEAD", "OPTIONS"):
            return [AllowAny()]
        return [IsAuthenticated()]


class ProjectListCreateView(PublicReadMixin, APIView):
    """
    GET  /api/projects/?search=&tags=&page=&limit=
    POST /api/projects/   (multipart: title, description, repositoryUrl,
                           liveDemoUrl, technologies, category, projectImage)
    """
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request):
        result = ListingQuery.from_params(request.query_params).execute()
        result["projects"] = ProjectSerializer(result["projects"], many=True).data
        return api_response("Projects retrieved successfully", result)

    def post(self, request):
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        fields = dict(serializer.validated_data)
        image = fields.pop("project_image", None)

        project = ProjectLifecycleService.create(request.user, fields, image=image)
        return api_response(
            "Project created successfully",
            ProjectSerializer(project).data,
            status_code=status.HTTP_201_CREATED,
        )


class ProjectDetailView(PublicReadMixin, APIView):
    """
    GET    /api/projects/<id>/
    PUT    /api/projects/<id>/   owner only, partial JSON
    DELETE /api/projects/<id>/   owner only
    """

    def get(self, request, pk):
        project = ProjectStore.find_by_id(pk)
        return api_response("Project retrieved successfully", ProjectSerializer(project).data)

    def put(self, request, pk):
        project = ProjectLifecycleService.update(request.user, pk, request.data)
        return api_response("Project updated successfully", ProjectSerializer(project).data)

    patch = put

    def delete(self, request, pk):
        project = ProjectLifecycleService.delete(request.user, pk)
        return api_response("Project deleted successfully", ProjectSerializer(project).data)


class UserProjectsView(APIView):
    """
    GET /api/projects/user/<user_id>/
    Projects owned by or contributed to by the user.
    """
    permission_classes = [AllowAny]

    def get(self, request, user_id):
        projects = ProjectLifecycleService.projects_for_user(user_id)
        return api_response(
            "Projects retrieved successfully",
            ProjectSerializer(projects, many=True).data,
        )


class ProjectLikeToggleView(APIView):
    """POST /api/projects/<project_id>/like/ -> {likesCount, liked}"""
    permission_classes = [IsAuthenticated]
    throttle_scope = "project-engagement"

    def post(self, request, project_id):
        result = EngagementTracker.toggle_like(project_id, request.user.pk)
        return api_response("Project like status toggled successfully", result)


class ProjectViewCountView(APIView):
    """
    POST /api/projects/<project_id>/view/ -> {viewsCount, viewed}
    Anonymous views are not tracked.
    """
    permission_classes = [IsAuthenticated]
    throttle_scope = "project-engagement"

    def post(self, request, project_id):
        result = EngagementTracker.add_unique_view(project_id, request.user.pk)
        return api_response("Project view count updated successfully", result)

from django.urls import path

from .views import (
    ProjectListCreateView,
    ProjectDetailView,
    UserProjectsView,
    ProjectLikeToggleView,
    ProjectViewCountView,
)

urlpatterns = [
    path("", ProjectListCreateView.as_view(), name="project-list-create"),
    path("user/<int:user_id>/", UserProjectsView.as_view(), name="user-projects"),
    path("<int:pk>/", ProjectDetailView.as_view(), name="project-detail"),
    path("<int:project_id>/like/", ProjectLikeToggleView.as_view(), name="project-like"),
    path("<int:project_id>/view/", ProjectViewCountView.as_view(), name="project-view"),
]

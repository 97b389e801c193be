# users/views.py - Profile API

import logging

from django.db import transaction
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.exceptions import NotFound
from core.responses import api_response
from core.storage import delete_image, upload_image
from .models import Profile
from .serializers import AvatarUploadSerializer, ProfileSerializer, UpdateProfileSerializer

logger = logging.getLogger("showcase")


def get_own_profile(user):
    try:
        return Profile.objects.select_related("user").get(user=user)
    except Profile.DoesNotExist:
        raise NotFound("Profile not found")


class ProfileView(APIView):
    """
    GET   /api/profile/  -> own profile
    PATCH /api/profile/  -> update bio / college / contactEmail / socialLinks
    POST  /api/profile/  -> same as PATCH (older clients)
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        profile = get_own_profile(request.user)
        return api_response("Profile retrieved successfully", ProfileSerializer(profile).data)

    def patch(self, request):
        profile = get_own_profile(request.user)
        serializer = UpdateProfileSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        profile = serializer.save()
        return api_response("Profile updated successfully", ProfileSerializer(profile).data)

    post = patch


class ProfileAvatarView(APIView):
    """
    POST /api/profile/avatar/
    Body: multipart, field "avatar"
    """
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request):
        serializer = AvatarUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = get_own_profile(request.user)
        previous_url = profile.avatar_url

        avatar_url = upload_image(serializer.validated_data["avatar"], folder="avatars")

        profile.avatar_url = avatar_url
        profile.save(update_fields=["avatar_url", "updated_at"])

        if previous_url:
            transaction.on_commit(lambda: delete_image(previous_url))

        logger.info(f"User {request.user.id} replaced avatar")
        return api_response("Avatar uploaded successfully", {"avatarUrl": avatar_url})

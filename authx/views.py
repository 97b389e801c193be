import logging

from django.conf import settings
from django.middleware.csrf import get_token
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken

from core.responses import api_response
from users.serializers import UserSerializer
from .serializers import RegisterSerializer, LoginSerializer

logger = logging.getLogger("showcase")


class RegisterView(APIView):
    # allow unauthenticated
    permission_classes = []
    authentication_classes = []
    throttle_scope = "auth"

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"Registered user {user.id}")
        # NO TOKEN RETURNED ON REGISTER (KEEP IT SIMPLE)
        return api_response(
            "User registered successfully",
            UserSerializer(user).data,
            status_code=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    # allow unauthenticated
    permission_classes = []
    authentication_classes = []
    throttle_scope = "auth"

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']
        refresh = RefreshToken.for_user(user)
        access = str(refresh.access_token)
        # issue the csrftoken cookie that unsafe cookie-authenticated requests must echo
        get_token(request)

        response = api_response(
            "Login successful",
            {
                "user": UserSerializer(user).data,
                "access": access,
                "refresh": str(refresh),
            },
        )
        response.set_cookie(
            settings.AUTH_COOKIE_NAME,
            access,
            max_age=int(settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"].total_seconds()),
            httponly=True,
            secure=settings.AUTH_COOKIE_SECURE,
            samesite=settings.AUTH_COOKIE_SAMESITE,
        )
        return response


class LogoutView(APIView):
    permission_classes = []
    authentication_classes = []

    def post(self, request):
        response = api_response("Logged out successfully")
        response.delete_cookie(settings.AUTH_COOKIE_NAME, samesite=settings.AUTH_COOKIE_SAMESITE)
        return response


class VerifyView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return api_response("User verified", UserSerializer(request.user).data)

# users/urls.py

from django.urls import path
from .views import ProfileView, ProfileAvatarView

urlpatterns = [
    path('', ProfileView.as_view(), name='profile'),
    path('avatar/', ProfileAvatarView.as_view(), name='profile-avatar'),
]

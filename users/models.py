# users/models.py
from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    name = models.CharField(max_length=150, blank=True)
    email = models.EmailField(unique=True)

    def __str__(self):
        return self.name or self.username


def default_social_links():
    return {network: "" for network in Profile.SOCIAL_NETWORKS}


class Profile(models.Model):
    """
    Public showcase profile, one per user.
    Created by a post_save signal on User (see users/signals.py).
    """
    SOCIAL_NETWORKS = ("twitter", "facebook", "linkedin", "instagram")

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    bio = models.TextField(blank=True, default="")
    avatar_url = models.CharField(max_length=1024, blank=True, default="")
    college = models.CharField(max_length=255, blank=True, default="")
    contact_email = models.EmailField(blank=True, default="")
    social_links = models.JSONField(default=default_social_links, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Profile of {self.user}"

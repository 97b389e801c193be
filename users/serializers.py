from rest_framework import serializers

from core.sanitizers import sanitize_description, sanitize_text
from core.storage import validate_image_size
from .models import User, Profile


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'username', 'date_joined']


class SocialLinksSerializer(serializers.Serializer):
    twitter = serializers.CharField(required=False, allow_blank=True, max_length=512)
    facebook = serializers.CharField(required=False, allow_blank=True, max_length=512)
    linkedin = serializers.CharField(required=False, allow_blank=True, max_length=512)
    instagram = serializers.CharField(required=False, allow_blank=True, max_length=512)


class ProfileSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)
    avatarUrl = serializers.CharField(source='avatar_url', read_only=True)
    contactEmail = serializers.EmailField(source='contact_email', read_only=True)
    socialLinks = serializers.JSONField(source='social_links', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Profile
        fields = [
            'id',
            'user',
            'bio',
            'avatarUrl',
            'college',
            'contactEmail',
            'socialLinks',
            'createdAt',
            'updatedAt',
        ]


class UpdateProfileSerializer(serializers.ModelSerializer):
    """
    Allow-listed profile update.
    Only provided fields are applied; socialLinks is merged per network.
    """
    contactEmail = serializers.EmailField(source='contact_email', required=False, allow_blank=True)
    socialLinks = SocialLinksSerializer(source='social_links', required=False)

    class Meta:
        model = Profile
        fields = ['bio', 'college', 'contactEmail', 'socialLinks']
        extra_kwargs = {
            'bio': {'required': False, 'allow_blank': True},
            'college': {'required': False, 'allow_blank': True},
        }

    def validate_bio(self, value):
        return sanitize_description(value)

    def validate_college(self, value):
        return sanitize_text(value, max_length=255)

    def update(self, instance, validated_data):
        social_links = validated_data.pop('social_links', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if social_links:
            merged = dict(instance.social_links or {})
            merged.update(social_links)
            instance.social_links = merged
        instance.save()
        return instance


class AvatarUploadSerializer(serializers.Serializer):
    avatar = serializers.ImageField(validators=[validate_image_size])

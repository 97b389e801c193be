from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from core.sanitizers import sanitize_text

User = get_user_model()


def unique_username_from_email(email: str) -> str:
    """
    Derive a username from the e-mail local part.
    "ada@uni.edu" -> "ada", then "ada_1", "ada_2", ... on collision.
    """
    base_username = email.split("@")[0][:140] or "user"
    username = base_username
    counter = 1
    while User.objects.filter(username=username).exists():
        username = f"{base_username}_{counter}"
        counter += 1
    return username


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True)

    class Meta:
        model = User
        fields = ['name', 'email', 'password']
        extra_kwargs = {'name': {'required': True, 'allow_blank': False}}

    def validate_email(self, value):
        value = value.lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists")
        return value

    def validate_name(self, value):
        return sanitize_text(value, max_length=150)

    def validate(self, attrs):
        validate_password(attrs["password"], user=User(name=attrs.get("name"), email=attrs.get("email")))
        return attrs

    def create(self, validated_data):
        user = User.objects.create_user(
            username=unique_username_from_email(validated_data['email']),
            email=validated_data['email'],
            password=validated_data['password'],
            name=validated_data['name'],
        )
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        email = attrs.get("email")
        password = attrs.get("password")

        try:
            user = User.objects.get(email__iexact=email)
        except User.DoesNotExist:
            raise serializers.ValidationError("Invalid credentials")

        user = authenticate(
            username=user.username,  # IMPORTANT: Django still authenticates by username
            password=password
        )

        if not user:
            raise serializers.ValidationError("Invalid credentials")

        attrs["user"] = user
        return attrs

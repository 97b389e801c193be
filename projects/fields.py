import json

from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework.utils import html

User = get_user_model()


def normalize_string_list(value) -> list[str]:
    """
    Normalize list-ish form input into trimmed, non-empty strings.

        ["AI", " ML "]        -> ["AI", "ML"]
        '["AI", "ML"]'        -> ["AI", "ML"]   (FormData + JSON.stringify)
        "AI, ML,,"            -> ["AI", "ML"]
        None / ""             -> []

    Order is kept and duplicates are not removed.
    """
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        parsed = None
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except ValueError:
                parsed = None
        value = parsed if isinstance(parsed, list) else text.split(",")

    if not isinstance(value, (list, tuple)):
        raise TypeError(f"Expected a list or string, got {type(value).__name__}")

    items = []
    for item in value:
        if item is None or isinstance(item, (dict, list)):
            continue
        text = str(item).strip()
        if text:
            items.append(text)
    return items


class StringListField(serializers.Field):
    """
    Accepts a JSON list, a JSON encoded list or a comma-separated string.
    In multipart bodies repeated keys are collected as a list.
    """
    default_error_messages = {
        "invalid": "Expected a list of strings or a comma-separated string.",
        "item_too_long": "Each entry must be at most {max_item_length} characters.",
    }

    def __init__(self, max_item_length=100, **kwargs):
        self.max_item_length = max_item_length
        super().__init__(**kwargs)

    def get_value(self, dictionary):
        if html.is_html_input(dictionary) and self.field_name in dictionary:
            values = dictionary.getlist(self.field_name)
            return values if len(values) > 1 else values[0]
        return super().get_value(dictionary)

    def to_internal_value(self, data):
        if not isinstance(data, (str, list, tuple)):
            self.fail("invalid")
        try:
            items = normalize_string_list(data)
        except TypeError:
            self.fail("invalid")
        if any(len(item) > self.max_item_length for item in items):
            self.fail("item_too_long", max_item_length=self.max_item_length)
        return items

    def to_representation(self, value):
        return list(value)


class ContributorInputSerializer(serializers.Serializer):
    userId = serializers.PrimaryKeyRelatedField(
        source="user",
        queryset=User.objects.all(),
        required=False,
        allow_null=True,
    )
    role = serializers.CharField(required=False, allow_blank=True, max_length=100)
    name = serializers.CharField(required=False, allow_blank=True, max_length=150)


class ContributorListField(serializers.Field):
    """Contributors as a JSON list, or a JSON encoded list from multipart forms."""
    default_error_messages = {
        "invalid": "Expected a list of contributors.",
    }

    def to_internal_value(self, data):
        if isinstance(data, str):
            if not data.strip():
                return []
            try:
                data = json.loads(data)
            except ValueError:
                self.fail("invalid")

        if not isinstance(data, list):
            self.fail("invalid")

        serializer = ContributorInputSerializer(data=data, many=True)
        if not serializer.is_valid():
            raise serializers.ValidationError(serializer.errors)
        return [dict(item) for item in serializer.validated_data]

    def to_representation(self, value):
        return value

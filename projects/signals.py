from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from core.storage import delete_image
from .models import Project


@receiver(post_delete, sender=Project)
def remove_project_image(sender, instance, **kwargs):
    # Covers API and admin deletes; runs only once the delete is committed
    image_url = instance.project_image_url
    if image_url:
        transaction.on_commit(lambda: delete_image(image_url))

import logging
from django.db.models.signals import post_save, post_delete, pre_save
from django.dispatch import receiver
from django.utils import timezone
from .models import BlogPost, Booking, Villa
from .utils import invalidate_dashboard_stats

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=BlogPost)
def stamp_published_at(sender, instance, **kwargs):
    """
    Set published_at when a post goes from unpublished to published

    Later saves of an already published post keep the original timestamp.
    """
    if not instance.is_published:
        return

    was_published = False
    if not instance._state.adding:
        was_published = sender.objects.filter(pk=instance.pk, is_published=True).exists()

    if not was_published:
        instance.published_at = timezone.now()
        logger.info(f"Blog post {instance.pk} published at {instance.published_at.isoformat()}")


@receiver(post_save, sender=Booking)
@receiver(post_save, sender=Villa)
def invalidate_stats_on_save(sender, instance, created, **kwargs):
    """
    Invalidate dashboard stats when a booking or villa is saved
    """
    deleted = invalidate_dashboard_stats()
    logger.info(
        f"Stats cache checked on {'creation' if created else 'update'} "
        f"of {sender.__name__.lower()} {instance.pk}. Cached entry deleted: {deleted}"
    )


@receiver(post_delete, sender=Booking)
@receiver(post_delete, sender=Villa)
def invalidate_stats_on_delete(sender, instance, **kwargs):
    """
    Invalidate dashboard stats when a booking or villa is deleted
    """
    deleted = invalidate_dashboard_stats()
    logger.info(
        f"Stats cache checked on deletion of {sender.__name__.lower()} "
        f"{instance.pk}. Cached entry deleted: {deleted}"
    )

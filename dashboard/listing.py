"""
State behind the list pages

A listing fetches every record once, newest first, and then applies row
actions to that fetched list the way the page shows it.
"""
import logging

from django.db import DatabaseError

from .utils import describe_store_error, is_missing_table

logger = logging.getLogger(__name__)


class RecordListing:
    """
    Rows of one model as displayed on a list page

    Args:
        model: Django model class
        missing_message (str): shown when the table was never migrated
        label (str): human name used in error messages, e.g. "blog posts"
    """

    def __init__(self, model, missing_message, label):
        self.model = model
        self.missing_message = missing_message
        self.label = label
        self.records = []
        self.error = None
        self.missing_table = False
        self.alert = None

    def load(self):
        """Fetch all records ordered by creation time, newest first"""
        self.error = None
        self.missing_table = False
        try:
            self.records = list(self.model.objects.order_by('-created_at'))
        except DatabaseError as e:
            logger.error(f"Failed to load {self.label}: {e}")
            self.records = []
            if is_missing_table(e):
                self.missing_table = True
                self.error = self.missing_message
            else:
                self.error = describe_store_error(e, f"loading {self.label}")
            return False
        logger.debug(f"Loaded {len(self.records)} {self.label}")
        return True

    def get(self, pk):
        for record in self.records:
            if str(record.pk) == str(pk):
                return record
        return None

    def toggle_publish(self, pk):
        """
        Flip the publish flag of one row, then write it

        The displayed row changes before the write. A failed write leaves
        the row flipped and sets ``alert``; the change is not rolled back.
        """
        record = self.get(pk)
        if record is None:
            raise self.model.DoesNotExist(pk)

        record.is_published = not record.is_published
        try:
            record.save(update_fields=['is_published', 'published_at', 'updated_at'])
        except DatabaseError as e:
            logger.error(f"Failed to update publish status of {pk}: {e}")
            self.alert = f"Failed to update: {e}"
            return False

        logger.info(f"{self.model.__name__} {pk} published={record.is_published}")
        return True

    def delete(self, pk):
        """Delete one row; it leaves the displayed list only once the delete succeeded"""
        record = self.get(pk)
        if record is None:
            raise self.model.DoesNotExist(pk)

        try:
            self.model.objects.filter(pk=record.pk).delete()
        except DatabaseError as e:
            logger.error(f"Failed to delete {pk}: {e}")
            self.alert = f"Failed to delete: {e}"
            return False

        self.records = [r for r in self.records if r.pk != record.pk]
        logger.info(f"Deleted {self.model.__name__} {pk}")
        return True

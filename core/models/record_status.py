from django.db import models

from core.exceptions import ActiveStatusNotConfigured, VoidedStatusNotConfigured


class RecordStatus(models.Model):
    """Seeded reference rows for record state (active / voided).

    Sales documents use this table as their state machine (FSMKeyField),
    lines, ledger entries and credit schedules point at it as well so the
    reporting layer can filter on one column everywhere.
    """

    ACTIVE = "active"
    VOIDED = "voided"

    code = models.CharField(max_length=20, primary_key=True)
    name = models.CharField(max_length=100)

    class Meta:
        ordering = ["code"]
        verbose_name_plural = "Record statuses"

    def __str__(self):
        return self.name

    @classmethod
    def require_active(cls):
        if not cls.objects.filter(pk=cls.ACTIVE).exists():
            raise ActiveStatusNotConfigured()
        return cls.ACTIVE

    @classmethod
    def require_voided(cls):
        if not cls.objects.filter(pk=cls.VOIDED).exists():
            raise VoidedStatusNotConfigured()
        return cls.VOIDED
